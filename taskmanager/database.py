"""
Task Manager API - Database Module

MongoDB connection management using Motor (async driver).
The connection is created in the application lifespan and kept on app.state.
"""

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase


class Database:
    """MongoDB database connection manager."""

    def __init__(self, uri: str, database_name: str):
        self.uri = uri
        self.database_name = database_name
        self.client: AsyncIOMotorClient | None = None
        self.db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB."""
        self.client = AsyncIOMotorClient(self.uri, tz_aware=True)
        self.db = self.client[self.database_name]

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get the database instance."""
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db


async def get_database(request: Request) -> AsyncIOMotorDatabase:
    """Dependency to get the database instance attached at startup."""
    return request.app.state.database.get_database()
