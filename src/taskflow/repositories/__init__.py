"""Database repositories for encapsulating persistence logic."""

from __future__ import annotations

from .base import BaseRepository
from .projects import ProjectRepository
from .tasks import TaskRepository
from .users import UserRepository

__all__ = ["BaseRepository", "ProjectRepository", "TaskRepository", "UserRepository"]
