"""HTTP-level errors raised outside the operation dispatcher."""
from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Error answered with an HTTP status code."""

    def __init__(
        self,
        code: int,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize service error.

        Args:
            code: HTTP status code
            message: Error message
            details: Optional error details
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }
