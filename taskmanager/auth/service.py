import logging
from typing import Optional, Tuple

import bcrypt

from taskmanager.auth.models import User
from taskmanager.auth.repository import UserRepositoryInterface
from taskmanager.auth.tokens import TokenService
from taskmanager.errors import DuplicateEmail, InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only reads the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


class AuthService:
    """Registration and login on top of the user store and token service."""

    def __init__(self, repository: UserRepositoryInterface, tokens: TokenService):
        self.repository = repository
        self.tokens = tokens

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> Tuple[User, str]:
        """Create a user and return it with a fresh token."""
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            raise ValidationError("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if await self.repository.get_by_email(email) is not None:
            raise DuplicateEmail()

        user = User.create(
            name=name,
            email=email,
            password_hash=self.hash_password(password),
        )
        await self.repository.create(user)
        logger.info(f"Registered user id={user.id}")
        return user.public(), self.tokens.issue(user.id)

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> Tuple[User, str]:
        """Authenticate by email and password and return the user with a token."""
        if not email or not email.strip() or not password:
            raise ValidationError("Email and password are required")

        user = await self.repository.get_by_email(email)
        # Same error for unknown email and wrong password
        if user is None or not user.password_hash:
            logger.warning("Login failed: unknown email")
            raise InvalidCredentials()
        if not self.verify_password(password, user.password_hash):
            logger.warning(f"Login failed: wrong password for user id={user.id}")
            raise InvalidCredentials()

        logger.info(f"User logged in id={user.id}")
        return user.public(), self.tokens.issue(user.id)
