"""Demo accounts for local development."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from ..core.config import get_settings
from ..core.logging import configure_logging
from ..services import UserService
from .session import async_session_maker

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_USERS: tuple[tuple[str, str], ...] = (
    ("john@example.com", "John Doe"),
    ("jane@example.com", "Jane Smith"),
    ("admin@example.com", "Admin User"),
)


async def seed(session_factory: async_sessionmaker | None = None) -> int:
    """Create the demo users when the users table is empty.

    Returns the number of users created; ``0`` when data already exists.
    """
    factory = session_factory or async_session_maker
    async with factory() as session:
        user_service = UserService(session)
        if await user_service.count_users() > 0:
            logger.info("Users already present, skipping demo data")
            return 0

        for email, name in DEMO_USERS:
            await user_service.create_user(email=email, password=DEMO_PASSWORD, name=name)

    logger.info(
        "Demo users created",
        extra={"emails": [email for email, _ in DEMO_USERS], "password": DEMO_PASSWORD},
    )
    return len(DEMO_USERS)


def main() -> None:
    """Entry-point hook for ``python -m taskflow.db.seed``."""
    configure_logging(get_settings())
    asyncio.run(seed())


if __name__ == "__main__":  # pragma: no cover - manual execution entry-point
    main()
