"""Task Manager API - personal task tracking service."""
