"""Operation handler factory."""
from typing import Dict, Type

from core.logger import LoggerService
from core.settings import Settings
from .errors import ConfigurationError
from .handlers import (
    AudioTranscriptionHandler,
    AudioTranslationHandler,
    ChatCompletionHandler,
    CodeInterpreterHandler,
    CompletionHandler,
    EmbeddingsHandler,
    FileAnalysisHandler,
    FileAnalysisWithVectorSearchHandler,
    FileSearchHandler,
    FileSearchWithImageHandler,
    ImageAnalysisHandler,
    ImageGenerationHandler,
    ListModelsHandler,
    ModerationHandler,
    OperationHandler,
    TextGenerationHandler,
)
from .models import OperationType
from .storage import AssetStorageClient

HANDLER_CLASSES: Dict[OperationType, Type[OperationHandler]] = {
    handler_class.operation_type: handler_class
    for handler_class in (
        TextGenerationHandler,
        ImageGenerationHandler,
        ImageAnalysisHandler,
        FileSearchHandler,
        FileSearchWithImageHandler,
        CodeInterpreterHandler,
        EmbeddingsHandler,
        ModerationHandler,
        ListModelsHandler,
        FileAnalysisHandler,
        FileAnalysisWithVectorSearchHandler,
        ChatCompletionHandler,
        CompletionHandler,
        AudioTranscriptionHandler,
        AudioTranslationHandler,
    )
}

_missing = set(OperationType) - set(HANDLER_CLASSES)
if _missing:
    raise RuntimeError(
        "No handler registered for: "
        + ", ".join(sorted(operation.value for operation in _missing))
    )


class HandlerFactory:
    """Factory for creating operation handlers."""

    def __init__(
        self,
        settings: Settings,
        logger: LoggerService,
        storage: AssetStorageClient,
    ) -> None:
        """Initialize handler factory.

        Args:
            settings: Settings instance
            logger: Logger service instance
            storage: Host asset storage client for audio handlers
        """
        self.settings = settings
        self.storage = storage
        self.logger = logger.get_logger(__name__)
        self.instance_logger = logger

    @staticmethod
    def resolve_operation_type(value: str) -> OperationType:
        """Map a raw tag onto an operation type.

        Raises:
            ConfigurationError: If the tag is unknown
        """
        try:
            return OperationType(value.strip())
        except ValueError:
            raise ConfigurationError(
                f"Unknown operation type: {value}", field="operation_type"
            ) from None

    def create(self, operation_type: OperationType) -> OperationHandler:
        """Create the handler for an operation type.

        Args:
            operation_type: Operation type

        Returns:
            Handler instance
        """
        handler_class = HANDLER_CLASSES[operation_type]
        self.logger.debug(
            "Creating operation handler",
            extra={
                "operation_type": operation_type.value,
                "handler": handler_class.__name__,
            },
        )
        if issubclass(handler_class, AudioTranscriptionHandler):
            return handler_class(
                settings=self.settings,
                logger=self.instance_logger,
                storage=self.storage,
            )
        return handler_class(settings=self.settings, logger=self.instance_logger)
