import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from cms_system.config import Settings, settings
from cms_system.exception_handlers import register_exception_handlers
from cms_system.extensions.repository import ExtensionRepository
from cms_system.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from cms_system.provider import SystemProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting up %s %s", app.title, app.version)
    yield
    logger.info("Shutting down the application...")


def create_app(
    app_settings: Settings | None = None,
    repository: ExtensionRepository | None = None,
) -> FastAPI:
    """Create the FastAPI application and boot its extensions."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        debug=app_settings.debug,
        version=app_settings.app_version,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    provider = SystemProvider(settings=app_settings, repository=repository)
    provider.register(app)
    provider.boot(app)

    app.add_middleware(StructuredLoggingMiddleware)

    if app_settings.debug:
        logger.info(f"Running in {app_settings.environment} mode")

    return app


if __name__ == "__main__":
    setup_structured_logging(settings.log_level, json_format=settings.json_logs)
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
