"""
Task Manager API - Task Schemas

Pydantic models for task API requests and responses.
Responses use the field names the web client reads (_id, userId, createdAt).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from taskmanager.tasks.enums import TaskStatus
from taskmanager.tasks.models import Task


class TaskCreateRequest(BaseModel):
    """Request model for creating a task."""

    title: Optional[str] = Field(default=None, description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: Optional[str] = Field(default=None, description="Task status")


class TaskUpdateRequest(BaseModel):
    """
    Request model for updating a task.

    Only fields present in the request body are applied; use
    model_dump(exclude_unset=True) to tell absent from empty.
    """

    title: Optional[str] = Field(default=None, description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: Optional[str] = Field(default=None, description="Task status")


class TaskResponse(BaseModel):
    """Response model for a single task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Task ID")
    title: str = Field(description="Task title")
    description: str = Field(description="Task description")
    status: TaskStatus = Field(description="Task status")
    owner_id: str = Field(alias="userId", description="Owner user ID")
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(alias="updatedAt", description="Last update timestamp")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            owner_id=task.owner_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskDeleteResponse(BaseModel):
    """Response model for task deletion."""

    message: str = Field(description="Success message")
