"""Generic async repository over a SQLModel table."""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Persistence primitives shared by the concrete repositories.

    Repositories flush but never commit; the owning service decides when the
    unit of work ends.
    """

    def __init__(self, session: AsyncSession, model_type: type[ModelType]) -> None:
        self._session = session
        self._model_type = model_type

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get(self, entity_id: int) -> ModelType | None:
        """Look an entity up by primary key alone, with no ownership filter."""
        return await self._session.get(self._model_type, entity_id)

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(self._model_type))
        return int(result.scalar_one())

    async def save(self, instance: ModelType) -> ModelType:
        """Stage ``instance`` and flush so generated ids are populated."""
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def delete(self, instance: ModelType) -> None:
        await self._session.delete(instance)
        await self._session.flush()

    async def refresh(self, instance: ModelType) -> ModelType:
        await self._session.refresh(instance)
        return instance
