"""FastAPI dependency injection setup."""
from typing import Any, Callable, Dict, Optional, Type

from fastapi import FastAPI

from core.logger import LoggerService
from core.settings import Settings
from operations.dispatcher import OperationDispatcher
from operations.factory import HandlerFactory
from operations.storage import AssetStorageClient

from .dependencies import container


def setup_di(app: FastAPI) -> None:
    """Register container providers as FastAPI dependency overrides.

    Args:
        app: FastAPI application instance

    Raises:
        RuntimeError: If DI configuration fails
    """
    logger = container.logger().get_logger(__name__)
    try:
        logger.info("Starting dependency injection configuration")
        for dependency_type, provider in get_di_dependencies().items():
            app.dependency_overrides[dependency_type] = provider
            logger.debug("Registered dependency: %s" % dependency_type.__name__)
        logger.info("Dependency injection configuration completed successfully")
    except Exception as e:
        logger.error("Failed to configure dependency injection: %s" % str(e))
        cleanup_di(app)
        raise RuntimeError("Dependency injection configuration failed") from e


def cleanup_di(app: Optional[FastAPI] = None) -> None:
    """Release container resources and dependency overrides.

    Safe to call more than once.
    """
    logger = container.logger().get_logger(__name__)
    try:
        container.shutdown_resources()
        container.reset_singletons()
        if app:
            app.dependency_overrides.clear()
        logger.info("Dependency injection cleanup completed")
    except Exception as e:
        logger.error("Error during DI cleanup: %s" % str(e), exc_info=True)


def get_di_dependencies() -> Dict[Type[Any], Callable[[], Any]]:
    """Map dependency types to their container providers."""
    return {
        Settings: container.settings.provider,
        LoggerService: container.logger.provider,
        AssetStorageClient: container.asset_storage.provider,
        HandlerFactory: container.handler_factory.provider,
        OperationDispatcher: container.dispatcher.provider,
    }
