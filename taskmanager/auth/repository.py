import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from taskmanager.auth.models import User, normalize_email
from taskmanager.errors import DuplicateEmail

logger = logging.getLogger(__name__)


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    Email lookups are case-insensitive exact matches.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEmail if the email is taken."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID, without the password hash."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, including the password hash."""
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        """Create the unique email index backing duplicate detection."""
        await self.collection.create_index([("email", ASCENDING)], unique=True)

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError:
            raise DuplicateEmail()
        logger.info(f"[MongoUserRepository] Created user id={user.id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": user_id}, {"password_hash": 0})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_email(self, email: str) -> Optional[User]:
        # Stored emails are normalized, so an exact match is case-insensitive
        doc = await self.collection.find_one({"email": normalize_email(email)})
        if doc is None:
            return None
        return User.from_dict(doc)


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._ids_by_email: Dict[str, str] = {}

    def clear(self) -> None:
        self._users.clear()
        self._ids_by_email.clear()

    async def create(self, user: User) -> User:
        key = normalize_email(user.email)
        if key in self._ids_by_email:
            raise DuplicateEmail()
        self._users[user.id] = user
        self._ids_by_email[key] = user.id
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.public() if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        user_id = self._ids_by_email.get(normalize_email(email))
        if user_id is None:
            return None
        return self._users[user_id]
