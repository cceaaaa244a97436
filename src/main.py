"""Application entry point."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from app import OperationsApp
from core.settings import settings
from di import container
from di.setup import cleanup_di, setup_di


@asynccontextmanager
async def lifespan(app: OperationsApp) -> AsyncGenerator[None, None]:
    """Log startup and release the container on shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    app_logger = app.state.logger.get_logger(__name__)
    app_logger.info(
        "Application started",
        extra={
            "environment": app.state.settings.ENVIRONMENT,
            "openai_base_url": app.state.settings.OPENAI_BASE_URL,
        },
    )
    try:
        yield
    finally:
        app_logger.info("Shutting down application")
        cleanup_di(app)


def init_app() -> FastAPI:
    """Build and configure the application."""
    app = OperationsApp(lifespan=lifespan)
    setup_di(app)

    app.state.logger = container.logger()
    app.state.settings = container.settings()
    app.state.dispatcher = container.dispatcher()

    app.configure()
    return app


def get_app() -> FastAPI:
    """Factory for ``uvicorn --factory main:get_app``."""
    return init_app()


if __name__ == "__main__":
    uvicorn.run(
        init_app(),
        host=settings.HOST,
        port=int(settings.PORT),
    )
