"""User lookups."""

from __future__ import annotations

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Return the user registered under exactly ``email``, if any."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
