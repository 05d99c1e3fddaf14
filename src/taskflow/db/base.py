"""Metadata registry used by Alembic and the test fixtures.

Importing the models here registers every table on ``SQLModel.metadata``.
"""

from __future__ import annotations

from sqlmodel import SQLModel

from ..models import Project, Task, User

metadata = SQLModel.metadata

__all__ = ["Project", "SQLModel", "Task", "User", "metadata"]
