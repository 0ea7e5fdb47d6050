import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from apnframe.api import frames, health
from apnframe.config import get_settings
from apnframe.logging_config import configure_json_logging
from apnframe.middleware.request_id import RequestIDMiddleware
from apnframe.version import get_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup and shutdown."""
    settings = get_settings()
    logger.info(
        "Frame encoder ready",
        extra={"environment": settings.environment, "auth_enabled": settings.auth_token is not None},
    )
    yield
    logger.info("Frame encoder shutting down")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    configure_json_logging(log_level=settings.log_level, use_json=settings.log_json)

    app = FastAPI(
        title="APN Frame Encoder",
        description="Binary frame encoding for push notifications",
        version=get_version(),
        lifespan=lifespan,
    )
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(frames.router)

    return app


app = create_app()
