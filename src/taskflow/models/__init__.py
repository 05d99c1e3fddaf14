"""SQLModel tables."""

from __future__ import annotations

from .common import TimestampMixin, utcnow
from .project import Project, ProjectBase
from .task import Task, TaskBase
from .user import User, UserBase

__all__ = [
    "Project",
    "ProjectBase",
    "Task",
    "TaskBase",
    "TimestampMixin",
    "User",
    "UserBase",
    "utcnow",
]
