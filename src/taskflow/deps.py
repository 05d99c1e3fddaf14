"""Reusable FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from .core.config import Settings, get_settings
from .core.security import JWTError, decode_access_token
from .db.session import get_session
from .errors import AuthenticationError
from .models import User
from .repositories import UserRepository
from .schemas import TokenPayload
from .services import AuthService, ProjectService, TaskService

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a database session."""

    async for session in get_session():
        yield session


SettingsDependency = Annotated[Settings, Depends(get_settings)]
DatabaseSessionDependency = Annotated[AsyncSession, Depends(get_db_session)]


def _decode(token: str, settings: Settings) -> TokenPayload:
    try:
        return TokenPayload.model_validate(decode_access_token(token, settings))
    except (JWTError, ValidationError) as exc:
        raise AuthenticationError() from exc


async def get_current_user(
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> User:
    """Resolve the bearer token to a persisted user or fail with 401."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated.")
    payload = _decode(credentials.credentials, settings)
    try:
        user_id = int(payload.sub)
    except ValueError as exc:
        raise AuthenticationError() from exc

    user = await UserRepository(session).get(user_id)
    if user is None:
        raise AuthenticationError()
    return user


CurrentUserDependency = Annotated[User, Depends(get_current_user)]


def get_current_user_id(current_user: CurrentUserDependency) -> int:
    if current_user.id is None:  # pragma: no cover - loaded users are persisted
        raise AuthenticationError()
    return current_user.id


CurrentUserIdDependency = Annotated[int, Depends(get_current_user_id)]


def get_project_service(session: DatabaseSessionDependency) -> ProjectService:
    return ProjectService(session)


def get_task_service(
    session: DatabaseSessionDependency,
    project_service: Annotated[ProjectService, Depends(get_project_service)],
) -> TaskService:
    return TaskService(session, project_service=project_service)


def get_auth_service(session: DatabaseSessionDependency, settings: SettingsDependency) -> AuthService:
    return AuthService(session, settings)


ProjectServiceDependency = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDependency = Annotated[TaskService, Depends(get_task_service)]
AuthServiceDependency = Annotated[AuthService, Depends(get_auth_service)]


__all__ = [
    "AuthServiceDependency",
    "CurrentUserDependency",
    "CurrentUserIdDependency",
    "DatabaseSessionDependency",
    "ProjectServiceDependency",
    "SettingsDependency",
    "TaskServiceDependency",
    "get_current_user",
    "get_db_session",
]
