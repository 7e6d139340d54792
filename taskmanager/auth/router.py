"""
Task Manager API - Authentication Router

Endpoints for user registration, login, and current user profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskmanager.auth.schemas import (
    UserRegisterRequest,
    UserLoginRequest,
    UserResponse,
    AuthResponse,
    ProfileResponse,
)
from taskmanager.auth.service import AuthService
from taskmanager.auth.dependencies import CurrentUser, get_auth_service


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Register a new user with name, email and password.

    - All fields are required
    - Password must be at least 6 characters
    - Email must not already be registered (case-insensitive)
    """
    user, token = await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserResponse.from_user(user),
        token=token,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and get access token",
)
async def login(
    request: UserLoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate user and return a JWT.

    Use the returned token in the Authorization header:
    `Authorization: Bearer <token>`
    """
    user, token = await auth_service.login(
        email=request.email,
        password=request.password,
    )
    return AuthResponse(
        message="Login successful",
        user=UserResponse.from_user(user),
        token=token,
    )


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get current user profile",
)
async def get_profile(current_user: CurrentUser) -> ProfileResponse:
    """Requires a valid JWT token in the Authorization header."""
    return ProfileResponse(user=UserResponse.from_user(current_user))
