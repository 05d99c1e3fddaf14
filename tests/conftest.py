from __future__ import annotations

import os

os.environ.setdefault("TASKFLOW_ENVIRONMENT", "test")
os.environ.setdefault("TASKFLOW_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKFLOW_JWT_SECRET_KEY", "test-secret")

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from taskflow.core.config import get_settings
from taskflow.db.base import metadata
from taskflow.deps import get_db_session
from taskflow.main import create_app
from taskflow.models import User
from taskflow.services import UserService

DEFAULT_PASSWORD = "StrongPass123!"


@dataclass(slots=True)
class AuthenticatedUser:
    user: User
    email: str
    password: str
    token: str | None

    @property
    def id(self) -> int:
        if self.user.id is None:  # pragma: no cover - defensive guard
            raise RuntimeError("Persisted user is missing an id.")
        return self.user.id

    @property
    def headers(self) -> dict[str, str]:
        if not self.token:
            raise RuntimeError("User has not been authenticated.")
        return {"Authorization": f"Bearer {self.token}"}


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def user_factory(session: AsyncSession) -> Callable[..., Awaitable[User]]:
    service = UserService(session)
    counter = count()

    async def _create(*, email: str | None = None, name: str = "Test User", password: str = DEFAULT_PASSWORD) -> User:
        return await service.create_user(
            email=email or f"user-{next(counter)}@example.com",
            password=password,
            name=name,
        )

    return _create


@pytest_asyncio.fixture
async def app(session: AsyncSession) -> AsyncIterator[FastAPI]:
    get_settings.cache_clear()
    application = create_app()

    async def _override_db_session() -> AsyncIterator[AsyncSession]:
        yield session

    application.dependency_overrides[get_db_session] = _override_db_session
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def authenticated_user(
    user_factory: Callable[..., Awaitable[User]],
    client: AsyncClient,
) -> Callable[..., Awaitable[AuthenticatedUser]]:
    async def _factory(
        *,
        email: str | None = None,
        name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        login: bool = True,
    ) -> AuthenticatedUser:
        user = await user_factory(email=email, name=name, password=password)
        token: str | None = None
        if login:
            response = await client.post(
                "/api/auth/login",
                json={"email": user.email, "password": password},
            )
            assert response.status_code == 200, response.text
            token = response.json()["token"]
        return AuthenticatedUser(user=user, email=user.email, password=password, token=token)

    return _factory
