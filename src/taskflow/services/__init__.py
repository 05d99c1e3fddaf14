"""Domain service layer package."""

from __future__ import annotations

from .auth import AuthService
from .progress import calculate_progress_percentage
from .projects import ProjectService
from .tasks import ProjectOwnershipGuard, TaskService
from .users import UserService

__all__ = [
    "AuthService",
    "ProjectOwnershipGuard",
    "ProjectService",
    "TaskService",
    "UserService",
    "calculate_progress_percentage",
]
