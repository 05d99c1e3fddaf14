"""Account creation and lookup."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.security import get_password_hash
from ..models import User
from ..repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = UserRepository(session)

    @property
    def repository(self) -> UserRepository:
        return self._repository

    async def create_user(self, *, email: str, password: str, name: str) -> User:
        """Hash ``password`` and persist a new user."""
        user = User(email=email, name=name, hashed_password=get_password_hash(password))
        await self._repository.save(user)
        await self._session.commit()
        await self._repository.refresh(user)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def count_users(self) -> int:
        return await self._repository.count()


__all__ = ["UserService"]
