"""Operation result models."""
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Failure details returned to the host."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Error kind, the raised class name")
    operation_type: str = Field(..., description="Operation that failed")
    model: Optional[str] = Field(None, description="Model the operation targeted")


class SuccessResult(BaseModel):
    """Successful operation result."""

    success: Literal[True] = True
    data: Dict[str, Any] = Field(default_factory=dict)
    response_id: Optional[str] = Field(
        None,
        description="Upstream response id, usable as previous_response_id",
    )

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json")
        if self.response_id is None:
            payload.pop("response_id")
        return payload


class ErrorResult(BaseModel):
    """Failed operation result."""

    success: Literal[False] = False
    error: ErrorDetail

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json")
        if self.error.model is None:
            payload["error"].pop("model")
        return payload


OperationResult = Union[SuccessResult, ErrorResult]
