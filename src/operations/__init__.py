"""OpenAI operation dispatch package."""

from .client import ClientFactory, OpenAIClientFactory
from .dispatcher import OperationDispatcher
from .errors import ConfigurationError, OperationError, ValidationError
from .factory import HANDLER_CLASSES, HandlerFactory
from .models import (
    ErrorDetail,
    ErrorResult,
    OperationRequest,
    OperationResult,
    OperationType,
    SuccessResult,
)
from .storage import AssetStorageClient

__all__ = [
    "AssetStorageClient",
    "ClientFactory",
    "ConfigurationError",
    "ErrorDetail",
    "ErrorResult",
    "HANDLER_CLASSES",
    "HandlerFactory",
    "OpenAIClientFactory",
    "OperationDispatcher",
    "OperationError",
    "OperationRequest",
    "OperationResult",
    "OperationType",
    "SuccessResult",
    "ValidationError",
]
