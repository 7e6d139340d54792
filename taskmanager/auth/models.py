
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional
import uuid


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """Emails are matched case-insensitively and stored lower-cased."""
    return email.strip().lower()


@dataclass
class User:
    """User entity for authentication."""

    id: str
    name: str
    email: str
    password_hash: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, name: str, email: str, password_hash: str) -> "User":
        """Create a new user with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            created_at=_utcnow(),
        )

    def public(self) -> "User":
        """Copy of this user without the password hash."""
        return replace(self, password_hash=None)

    def to_dict(self) -> dict:
        """Convert user to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create user from MongoDB document."""
        return cls(
            id=data["_id"],
            name=data["name"],
            email=data["email"],
            password_hash=data.get("password_hash"),
            created_at=data["created_at"],
        )
