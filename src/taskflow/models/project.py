"""Project table."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin


class ProjectBase(SQLModel, table=False):
    """Fields a caller may set on a project."""

    title: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )


class Project(ProjectBase, TimestampMixin, table=True):
    """A container of tasks owned by exactly one user.

    ``owner_id`` is fixed at creation; no operation reassigns it.
    """

    __tablename__ = "projects"
    __table_args__ = (
        sa.CheckConstraint("length(title) > 0", name="ck_projects_title_length"),
        sa.Index("ix_projects_owner_id", "owner_id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    owner_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


__all__ = ["Project", "ProjectBase"]
