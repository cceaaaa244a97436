"""Operation models package."""

from .request import (
    DEFAULT_OPERATION_TYPE,
    AudioResponseFormat,
    ImageQuality,
    ImageSize,
    ImageStyle,
    OperationRequest,
    OperationType,
    ResponseFormat,
)
from .result import ErrorDetail, ErrorResult, OperationResult, SuccessResult

__all__ = [
    "AudioResponseFormat",
    "DEFAULT_OPERATION_TYPE",
    "ErrorDetail",
    "ErrorResult",
    "ImageQuality",
    "ImageSize",
    "ImageStyle",
    "OperationRequest",
    "OperationResult",
    "OperationType",
    "ResponseFormat",
    "SuccessResult",
]
