"""Task persistence and per-project counters."""

from __future__ import annotations

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Project, Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """``Task`` queries; ownership is resolved through the parent project."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def list_for_project(self, project_id: int) -> list[Task]:
        result = await self.session.execute(select(Task).where(Task.project_id == project_id))
        return list(result.scalars().all())

    async def get_for_owner(self, task_id: int, owner_id: int) -> Task | None:
        """Return the task if its project is owned by ``owner_id``.

        The join keeps the ownership check and the fetch in one statement.
        """
        result = await self.session.execute(
            select(Task)
            .join(Project, Task.project_id == Project.id)
            .where(Task.id == task_id, Project.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def count_for_project(self, project_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Task).where(Task.project_id == project_id)
        )
        return int(result.scalar_one())

    async def count_completed_for_project(self, project_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Task)
            .where(Task.project_id == project_id, Task.is_completed.is_(True))
        )
        return int(result.scalar_one())


__all__ = ["TaskRepository"]
