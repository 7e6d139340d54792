"""
Task Manager API - Task Service

Business logic for ownership-scoped task operations.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from taskmanager.errors import NotFound, ValidationError
from taskmanager.tasks.models import Task
from taskmanager.tasks.repository import TaskRepositoryInterface
from taskmanager.tasks.enums import TaskStatus

logger = logging.getLogger(__name__)


def _parse_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


class TaskService:
    """Service layer for task business logic."""

    def __init__(
        self,
        repository: TaskRepositoryInterface,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the task service.

        Args:
            repository: Task repository implementation
            clock: Optional clock function for testing (returns current datetime)
        """
        self.repository = repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _now(self) -> datetime:
        """Get current time using the configured clock, at MongoDB precision."""
        now = self._clock()
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    async def list_tasks(self, owner_id: str) -> List[Task]:
        """All tasks for owner, newest first."""
        return await self.repository.list_by_owner(owner_id)

    async def create_task(
        self,
        owner_id: str,
        title: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        """Create a new task for the owner."""
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")

        task = Task.create(
            owner_id=owner_id,
            title=title,
            description=(description or "").strip(),
            status=_parse_status(status) if status else TaskStatus.PENDING,
            now=self._now(),
        )
        await self.repository.create(task)
        logger.info(f"Created task {task.id} for user {owner_id}")
        return task

    async def update_task(
        self,
        owner_id: str,
        task_id: str,
        fields: Dict[str, Any],
    ) -> Task:
        """
        Apply a partial update, scoped to owner.

        Only keys present in fields are changed. updated_at is refreshed on
        every successful call, including one with no fields.
        """
        current = await self.repository.get_by_id(task_id, owner_id)
        if current is None:
            raise NotFound()

        updates: Dict[str, Any] = {}
        if "title" in fields:
            title = (fields["title"] or "").strip()
            if not title:
                raise ValidationError("Title cannot be empty")
            updates["title"] = title
        if "description" in fields:
            updates["description"] = (fields["description"] or "").strip()
        if "status" in fields:
            updates["status"] = _parse_status(fields["status"])
        updates["updated_at"] = self._now()

        task = await self.repository.update(task_id, owner_id, updates)
        if task is None:
            # Deleted between the read and the write
            raise NotFound()
        logger.info(f"Updated task {task_id} for user {owner_id}")
        return task

    async def delete_task(self, owner_id: str, task_id: str) -> None:
        """Delete a task, scoped to owner."""
        if not await self.repository.delete(task_id, owner_id):
            raise NotFound()
        logger.info(f"Deleted task {task_id} for user {owner_id}")

    async def count_tasks(self, owner_id: str) -> int:
        """Count total tasks for owner."""
        return await self.repository.count_by_owner(owner_id)
