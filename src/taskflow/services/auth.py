"""Email/password login producing a bearer token."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import Settings
from ..core.security import create_access_token, verify_password
from ..errors import AuthenticationError
from ..repositories import UserRepository
from ..schemas import LoginResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


class AuthService:
    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self._settings = settings
        self._user_repository = UserRepository(session)

    async def authenticate(self, email: str, password: str) -> LoginResponse:
        """Exchange credentials for an access token.

        An unknown email and a wrong password fail identically.
        """
        user = await self._user_repository.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Login rejected", extra={"email": email})
            raise AuthenticationError(INVALID_CREDENTIALS)
        if user.id is None:  # pragma: no cover - persisted users always have ids
            raise AuthenticationError(INVALID_CREDENTIALS)

        generated = create_access_token(
            subject=user.id,
            settings=self._settings,
            claims={"email": user.email},
        )
        logger.info("Login succeeded", extra={"user_id": user.id})
        return LoginResponse(token=generated.token, email=user.email, name=user.name)


__all__ = ["AuthService", "INVALID_CREDENTIALS"]
