"""
Task Manager API - Task Router

CRUD endpoints for task management.
All endpoints are JWT-protected and user-scoped.
"""

from typing import Annotated, List

from fastapi import APIRouter, status, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from taskmanager.database import get_database
from taskmanager.auth.dependencies import CurrentUser
from taskmanager.tasks.service import TaskService
from taskmanager.tasks.repository import TaskRepository, TaskRepositoryInterface
from taskmanager.tasks.schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskResponse,
    TaskDeleteResponse,
)


router = APIRouter(prefix="/tasks", tags=["Tasks"])


async def get_task_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return TaskRepository(db)


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List tasks",
)
async def list_tasks(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> List[TaskResponse]:
    """All tasks of the authenticated user, newest first."""
    tasks = await service.list_tasks(current_user.id)
    return [TaskResponse.from_task(task) for task in tasks]


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskCreateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Create a new task for the authenticated user.

    Title is required; description defaults to "" and status to "pending".
    """
    task = await service.create_task(
        owner_id=current_user.id,
        title=request.title,
        description=request.description,
        status=request.status,
    )
    return TaskResponse.from_task(task)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
async def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Update a task by ID.

    Only provided fields will be updated.
    Returns 404 if the task doesn't exist or belongs to another user.
    """
    task = await service.update_task(
        owner_id=current_user.id,
        task_id=task_id,
        fields=request.model_dump(exclude_unset=True),
    )
    return TaskResponse.from_task(task)


@router.delete(
    "/{task_id}",
    response_model=TaskDeleteResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskDeleteResponse:
    """
    Delete a task by ID.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    await service.delete_task(current_user.id, task_id)
    return TaskDeleteResponse(message="Task deleted successfully")
