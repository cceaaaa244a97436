"""Dependency injection container."""
from dependency_injector import containers, providers

from core.logger import LoggerService
from core.settings import Settings
from operations.client import OpenAIClientFactory
from operations.dispatcher import OperationDispatcher
from operations.factory import HandlerFactory
from operations.storage import AssetStorageClient


class Container(containers.DeclarativeContainer):
    """Main application container."""

    wiring_config = containers.WiringConfiguration()

    # Settings
    settings = providers.Singleton(Settings)

    # Core services
    logger = providers.Singleton(LoggerService, settings_instance=settings)

    # Host file storage, used by the audio operations
    asset_storage = providers.Singleton(
        AssetStorageClient,
        settings=settings,
        logger=logger,
    )

    # OpenAI client per invocation
    client_factory = providers.Singleton(
        OpenAIClientFactory,
        settings=settings,
        logger=logger,
    )

    handler_factory = providers.Singleton(
        HandlerFactory,
        settings=settings,
        logger=logger,
        storage=asset_storage,
    )

    dispatcher = providers.Singleton(
        OperationDispatcher,
        settings=settings,
        logger=logger,
        handler_factory=handler_factory,
        client_factory=client_factory,
    )


container = Container()
