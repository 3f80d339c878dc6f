from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from hours_tracker.api.health import router as health_router
from hours_tracker.api.router import api_router
from hours_tracker.components.registry import build_component_registry
from hours_tracker.config import get_settings
from hours_tracker.db import dispose_engine
from hours_tracker.exceptions import setup_exception_handlers
from hours_tracker.logging_config import configure_logging
from hours_tracker.middleware import setup_middleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)
    yield
    logger.info("Shutting down %s", settings.app_name)
    await dispose_engine()


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    # Card components are resolved per request from this registry.
    application.state.components = build_component_registry()

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()
