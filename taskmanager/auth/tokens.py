"""
Task Manager API - Token Service

Issues and verifies signed, time-limited JWT identity assertions.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from taskmanager.errors import ConfigurationError, InvalidToken

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(days=7)


class TokenService:
    """Stateless JWT issuance and verification with an injected secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
    ):
        if not secret_key:
            raise ConfigurationError("Token signing secret must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed token for user_id."""
        if expires_delta is None:
            expires_delta = self.lifetime

        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": user_id,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id in token, or raise InvalidToken."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidToken() from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidToken()
        return user_id
