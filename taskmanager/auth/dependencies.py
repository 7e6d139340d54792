import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from taskmanager.database import get_database
from taskmanager.auth.models import User
from taskmanager.auth.service import AuthService
from taskmanager.auth.tokens import TokenService
from taskmanager.auth.repository import MongoUserRepository, UserRepositoryInterface
from taskmanager.errors import InvalidToken, Unauthenticated

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme - auto_error=False to handle missing tokens ourselves
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """Dependency to get the TokenService built at startup."""
    return request.app.state.token_service


def get_user_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> UserRepositoryInterface:
    """Dependency to get the MongoDB user repository."""
    return MongoUserRepository(db)


def get_auth_service(
    user_repo: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(user_repo, tokens)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    user_repo: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
) -> User:
    """Resolve the caller from the bearer token or raise Unauthenticated."""
    if credentials is None:
        raise Unauthenticated("Authentication required")

    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidToken:
        logger.warning("Rejected request with invalid or expired token")
        raise Unauthenticated()

    user = await user_repo.get_by_id(user_id)
    if user is None:
        logger.warning(f"Token references unknown user id={user_id}")
        raise Unauthenticated()

    return user.public()


# Type alias for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
