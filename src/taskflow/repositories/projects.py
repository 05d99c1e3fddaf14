"""Project persistence, always filtered by owner where a caller is involved."""

from __future__ import annotations

from sqlalchemy import delete as sa_delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Project, Task
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """``Project`` queries scoped to their owning user."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Project)

    async def list_for_owner(self, owner_id: int) -> list[Project]:
        """Return every project owned by ``owner_id`` in insertion order."""
        result = await self.session.execute(
            select(Project).where(Project.owner_id == owner_id).order_by(Project.id)
        )
        return list(result.scalars().all())

    async def get_for_owner(self, project_id: int, owner_id: int) -> Project | None:
        """Return the project only when it exists *and* belongs to ``owner_id``."""
        result = await self.session.execute(
            select(Project).where(Project.id == project_id, Project.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, project_id: int) -> bool:
        """Check the database directly, bypassing any instance already in the session."""
        result = await self.session.execute(select(Project.id).where(Project.id == project_id))
        return result.scalar_one_or_none() is not None

    async def delete(self, instance: Project) -> None:
        """Remove the project's tasks, then the project, in the current transaction."""
        await self.session.execute(sa_delete(Task).where(Task.project_id == instance.id))
        await super().delete(instance)


__all__ = ["ProjectRepository"]
