"""Column helpers shared by every table."""

from __future__ import annotations

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel, table=False):
    """``created_at``/``updated_at`` columns.

    ``updated_at`` is bumped by :meth:`touch`; services call it on every
    mutation so the value does not depend on database-side triggers.
    """

    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )

    def touch(self) -> None:
        self.updated_at = utcnow()


__all__ = ["TimestampMixin", "utcnow"]
