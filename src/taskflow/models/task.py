"""Task table."""

from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin


class TaskBase(SQLModel, table=False):
    title: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    description: str | None = Field(
        default=None,
        max_length=5000,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )
    due_date: date | None = Field(
        default=None,
        sa_column=sa.Column(sa.Date(), nullable=True),
    )


class Task(TaskBase, TimestampMixin, table=True):
    """A unit of work inside a project.

    A task is either complete or not; :attr:`is_completed` only changes
    through the toggle operation.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        sa.CheckConstraint("length(title) > 0", name="ck_tasks_title_length"),
        sa.Index("ix_tasks_project_id", "project_id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    is_completed: bool = Field(
        default=False,
        sa_column=sa.Column(sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    project_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


__all__ = ["Task", "TaskBase"]
