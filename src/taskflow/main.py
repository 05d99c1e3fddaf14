"""Entry point for the TaskFlow API."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .db.seed import seed
from .deps import SettingsDependency
from .errors import register_exception_handlers
from .schemas import RootResponse

logger = logging.getLogger(__name__)


def _normalise_prefix(raw_prefix: str) -> str:
    prefix = raw_prefix.strip()
    if prefix and not prefix.startswith("/"):
        prefix = f"/{prefix}"
    prefix = prefix.rstrip("/")
    return "" if prefix == "/" else prefix


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a configured application; ``settings`` defaults to the cached instance."""

    settings = settings or get_settings()
    configure_logging(settings)

    router_prefix = _normalise_prefix(settings.api_prefix)

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Projects and tasks, scoped to the authenticated owner.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=f"{router_prefix}/openapi.json",
    )
    application.state.settings = settings

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    application.include_router(api_router, prefix=router_prefix)
    application.include_router(health_router)

    @application.get("/", response_model=RootResponse, summary="Service metadata", tags=["system"])
    async def read_root(app_settings: SettingsDependency) -> RootResponse:
        return RootResponse(
            name=app_settings.project_name,
            environment=app_settings.environment,
            version=app_settings.version,
            api_prefix=router_prefix,
        )

    register_exception_handlers(application)

    if settings.seed_demo_data:

        @application.on_event("startup")
        async def _seed_demo_data() -> None:
            created = await seed()
            logger.info("Startup seeding finished", extra={"users_created": created})

    return application


app = create_app()


def run() -> None:
    """Console-script entry point (``taskflow-api``)."""

    settings: Settings = get_settings()
    uvicorn.run(
        "taskflow.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
