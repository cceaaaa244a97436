"""Operation dispatcher."""
from typing import AbstractSet, Any, Mapping, Optional, Union

from pydantic import ValidationError as OptionsValidationError

from core.logger import LoggerService
from core.settings import Settings
from .client import ClientFactory
from .errors import ConfigurationError, ValidationError, describe_error
from .factory import HandlerFactory
from .models import (
    DEFAULT_OPERATION_TYPE,
    ErrorDetail,
    ErrorResult,
    OperationRequest,
    OperationResult,
)

Options = Union[OperationRequest, Mapping[str, Any], None]


class OperationDispatcher:
    """Runs one operation per call and always returns a result envelope.

    Every failure, local or upstream, is converted into an ``ErrorResult``;
    nothing raised inside an operation escapes ``execute``.
    """

    def __init__(
        self,
        settings: Settings,
        logger: LoggerService,
        handler_factory: HandlerFactory,
        client_factory: ClientFactory,
    ) -> None:
        """Initialize dispatcher.

        Args:
            settings: Settings instance
            logger: Logger service instance
            handler_factory: Factory creating per-type handlers
            client_factory: Callable building an OpenAI client from an API key
        """
        self.settings = settings
        self.logger = logger.get_logger(__name__)
        self.handler_factory = handler_factory
        self.client_factory = client_factory

    @staticmethod
    def _raw_option(options: Options, name: str) -> Optional[str]:
        if isinstance(options, OperationRequest):
            value = getattr(options, name)
        elif isinstance(options, Mapping):
            value = options.get(name)
        else:
            value = None
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return str(value).strip()

    @staticmethod
    def _coerce(options: Options, names: AbstractSet[str]) -> OperationRequest:
        """Build the request model from the options the handler reads.

        Options outside ``names`` belong to other operation types and are
        dropped before validation.

        Raises:
            ValidationError: If an option has the wrong type or value
        """
        if isinstance(options, OperationRequest):
            return options
        try:
            return OperationRequest.model_validate(
                {key: value for key, value in (options or {}).items() if key in names}
            )
        except OptionsValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "options"
            raise ValidationError(
                f"Invalid option '{field}': {error['msg']}", field=field
            ) from None

    @staticmethod
    async def _close(client: Any) -> None:
        close = getattr(client, "close", None)
        if close is not None:
            await close()

    async def execute(self, options: Options) -> OperationResult:
        """Execute a single operation.

        Args:
            options: Option bag as a mapping or an OperationRequest

        Returns:
            SuccessResult or ErrorResult, never raises
        """
        operation_type = (
            self._raw_option(options, "operation_type") or DEFAULT_OPERATION_TYPE.value
        )
        model = self._raw_option(options, "model") or self.settings.DEFAULT_MODEL

        try:
            api_key = (
                self._raw_option(options, "api_key") or self.settings.OPENAI_API_KEY
            )
            if not api_key:
                raise ConfigurationError("OpenAI API key is required", field="api_key")

            handler = self.handler_factory.create(
                self.handler_factory.resolve_operation_type(operation_type)
            )
            request = self._coerce(options, handler.option_names())
            payload = handler.prepare(request)

            client = self.client_factory(api_key)
            try:
                result = await handler.call(client, request, payload)
            finally:
                await self._close(client)

        except Exception as e:
            error = describe_error(e)
            self.logger.error(
                "OpenAI operation failed",
                extra={
                    "operation_type": operation_type,
                    "model": model,
                    "error_type": error["type"],
                    "error": error["message"],
                },
            )
            return ErrorResult(
                error=ErrorDetail(
                    message=error["message"],
                    type=error["type"],
                    operation_type=operation_type,
                    model=model,
                )
            )

        self.logger.info(
            "OpenAI operation completed",
            extra={
                "operation_type": operation_type,
                "model": model,
                "response_id": result.response_id,
            },
        )
        return result
