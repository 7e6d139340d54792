"""
Task Manager API - Tasks Module

Ownership-scoped task CRUD.
"""

from taskmanager.tasks.router import router as tasks_router

__all__ = ["tasks_router"]
