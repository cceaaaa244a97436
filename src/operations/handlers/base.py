"""Base operation handler interface."""
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, Sequence, Tuple

from core.logger import LoggerService
from core.settings import Settings
from ..errors import ConfigurationError
from ..models import OperationRequest, OperationType, SuccessResult
from ..payload import get_field, to_plain

# Read by every operation type
BASE_OPTIONS = ("api_key", "operation_type", "model")
# Conversation state shared by Responses API operations
CONVERSATION_OPTIONS = ("store_response", "previous_response_id")
# Response shaping shared by the text producing Responses API operations
RESPONSE_SHAPE_OPTIONS = ("response_format", "json_schema", "max_output_tokens")


class OperationHandler(ABC):
    """Base class for all operation handlers.

    A handler owns one operation type and is responsible for:
    - Checking the options that type requires
    - Building the upstream request payload
    - Calling the upstream once
    - Re-projecting the upstream response into the result data
    """

    operation_type: ClassVar[OperationType]
    # Options the handler may require; each must be visible in the form
    required_fields: ClassVar[Tuple[str, ...]] = ()
    # Options the handler reads; values of every other option are ignored
    option_fields: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, settings: Settings, logger: LoggerService) -> None:
        """Initialize handler.

        Args:
            settings: Settings instance
            logger: Logger service instance
        """
        self.settings = settings
        self.logger = logger.get_logger(__name__)

    @classmethod
    def option_names(cls) -> FrozenSet[str]:
        return frozenset(BASE_OPTIONS + cls.option_fields)

    def resolve_model(self, request: OperationRequest) -> str:
        return request.model or self.settings.DEFAULT_MODEL

    def resolve_max_output_tokens(self, request: OperationRequest) -> int:
        return request.max_output_tokens or self.settings.DEFAULT_MAX_OUTPUT_TOKENS

    @staticmethod
    def require(value: Any, message: str, field: str) -> None:
        """Fail when a required option is missing or empty.

        Raises:
            ConfigurationError: If the value is missing
        """
        if value is None or (isinstance(value, (str, list, tuple, dict)) and not value):
            raise ConfigurationError(message, field=field)

    @staticmethod
    def require_any(values: Sequence[Any], message: str, field: str) -> None:
        if not any(values):
            raise ConfigurationError(message, field=field)

    @abstractmethod
    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        """Validate options and build the upstream payload.

        No network access happens here.

        Args:
            request: Operation request

        Returns:
            Upstream request parameters

        Raises:
            ConfigurationError: If a required option is missing
            ValidationError: If an option is malformed
        """
        raise NotImplementedError

    @abstractmethod
    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        """Invoke the upstream and project its response.

        Args:
            client: OpenAI client for this invocation
            request: Operation request
            payload: Parameters built by prepare()

        Returns:
            Success result
        """
        raise NotImplementedError


class ResponsesHandler(OperationHandler):
    """Handler backed by a single Responses API call."""

    def project(self, response: Any, request: OperationRequest) -> Dict[str, Any]:
        """Default re-projection for text-producing variants."""
        return {
            "content": get_field(response, "output_text") or "",
            "model": get_field(response, "model"),
            "usage": to_plain(get_field(response, "usage")),
            "finish_reason": get_field(response, "status"),
            "response_format": request.response_format,
        }

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        response = await client.responses.create(**payload)
        return SuccessResult(
            data=self.project(response, request),
            response_id=get_field(response, "id"),
        )


def output_items(response: Any, item_type: str) -> list:
    """Collect plain output items of one type from a Responses API response."""
    items = []
    for item in get_field(response, "output") or []:
        if get_field(item, "type") == item_type:
            items.append(to_plain(item))
    return items


def output_annotations(response: Any, annotation_type: str) -> list:
    """Collect message annotations of one type from a Responses API response."""
    annotations = []
    for item in get_field(response, "output") or []:
        if get_field(item, "type") != "message":
            continue
        for part in get_field(item, "content") or []:
            for annotation in get_field(part, "annotations") or []:
                if get_field(annotation, "type") == annotation_type:
                    annotations.append(to_plain(annotation))
    return annotations
