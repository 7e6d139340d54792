"""
Task Manager API - Authentication Schemas

Pydantic models for authentication requests and responses.
Required-field checks live in AuthService so that missing fields map to 400.
"""

from typing import Optional

from pydantic import BaseModel

from taskmanager.auth.models import User


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public user information response."""

    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(BaseModel):
    """Response schema for successful registration or login."""

    message: str
    user: UserResponse
    token: str


class ProfileResponse(BaseModel):
    """Response schema for the current user's profile."""

    user: UserResponse

