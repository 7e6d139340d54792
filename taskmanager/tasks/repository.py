"""
Task Manager API - Task Repository

Repository pattern for task data access.
Includes MongoDB implementation for runtime and an in-memory one for testing.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from taskmanager.tasks.models import Task
from taskmanager.tasks.enums import TaskStatus


class TaskRepositoryInterface(ABC):
    """
    Abstract interface for task repository.

    Enables swapping implementations (MongoDB for runtime, in-memory for tests).
    All operations are scoped by owner_id to enforce ownership isolation.
    Concurrent writes to one task are last-write-wins.
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Task]:
        """List tasks for owner, newest first."""
        pass

    @abstractmethod
    async def update(self, task_id: str, owner_id: str, updates: dict) -> Optional[Task]:
        pass

    @abstractmethod
    async def delete(self, task_id: str, owner_id: str) -> bool:
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: str) -> int:
        pass


class TaskRepository(TaskRepositoryInterface):
    """
    MongoDB implementation of the task repository.

    All queries are scoped by owner_id to enforce ownership isolation.
    """

    COLLECTION_NAME = "tasks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index(
            [("owner_id", ASCENDING), ("created_at", DESCENDING)]
        )

    async def create(self, task: Task) -> Task:
        await self.collection.insert_one(task.to_dict())
        return task

    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        doc = await self.collection.find_one({"_id": task_id, "owner_id": owner_id})
        if doc is None:
            return None
        return Task.from_dict(doc)

    async def list_by_owner(self, owner_id: str) -> List[Task]:
        cursor = self.collection.find({"owner_id": owner_id}).sort("created_at", -1)
        tasks: List[Task] = []
        async for doc in cursor:
            tasks.append(Task.from_dict(doc))
        return tasks

    async def update(self, task_id: str, owner_id: str, updates: dict) -> Optional[Task]:
        stored = {
            key: value.value if isinstance(value, TaskStatus) else value
            for key, value in updates.items()
        }
        result = await self.collection.find_one_and_update(
            {"_id": task_id, "owner_id": owner_id},
            {"$set": stored},
            return_document=ReturnDocument.AFTER,
        )
        if result is None:
            return None
        return Task.from_dict(result)

    async def delete(self, task_id: str, owner_id: str) -> bool:
        result = await self.collection.delete_one({"_id": task_id, "owner_id": owner_id})
        return result.deleted_count > 0

    async def count_by_owner(self, owner_id: str) -> int:
        return await self.collection.count_documents({"owner_id": owner_id})


class InMemoryTaskRepository(TaskRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    def clear(self) -> None:
        self._tasks.clear()

    async def create(self, task: Task) -> Task:
        self._tasks[task.id] = replace(task)
        return task

    async def get_by_id(self, task_id: str, owner_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return None
        return replace(task)

    async def list_by_owner(self, owner_id: str) -> List[Task]:
        results = [replace(t) for t in self._tasks.values() if t.owner_id == owner_id]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    async def update(self, task_id: str, owner_id: str, updates: dict) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return None

        for key, value in updates.items():
            if hasattr(task, key):
                setattr(task, key, value)
        return replace(task)

    async def delete(self, task_id: str, owner_id: str) -> bool:
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != owner_id:
            return False
        del self._tasks[task_id]
        return True

    async def count_by_owner(self, owner_id: str) -> int:
        return sum(1 for t in self._tasks.values() if t.owner_id == owner_id)
