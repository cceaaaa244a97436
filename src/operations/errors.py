"""Error models for operation dispatch.

Errors raised here are detected locally, before any upstream call, and are
converted into the failure envelope by the dispatcher.
"""
from typing import Any, Dict, Optional


class OperationError(Exception):
    """Operation error with details."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize operation error.

        Args:
            message: Error message
            details: Optional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(OperationError):
    """Missing credential, unknown operation type or missing required option."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            field: Option that is missing, if any
        """
        super().__init__(
            message=message,
            details={"field": field} if field else None,
        )


class ValidationError(OperationError):
    """Option present but malformed."""

    def __init__(self, message: str, field: str) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            field: Field that failed validation
        """
        super().__init__(
            message=message,
            details={"field": field},
        )
        self.field = field


def describe_error(error: object) -> Dict[str, str]:
    """Extract the kind and message of anything raised during an operation.

    Args:
        error: The caught value

    Returns:
        Dictionary with ``type`` and ``message`` keys
    """
    if isinstance(error, BaseException):
        message = getattr(error, "message", None)
        if not isinstance(message, str) or not message:
            message = str(error) or type(error).__name__
        return {"type": type(error).__name__, "message": message}
    if isinstance(error, str):
        return {"type": "UnknownError", "message": error}
    return {"type": "UnknownError", "message": "Unknown error occurred"}
