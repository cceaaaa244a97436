"""Chat Completions era handlers.

These operation types predate the Responses API migration and remain
available for flows that still select them.
"""
from typing import Any, Dict

from core.logger import LoggerService
from core.settings import Settings
from ..models import OperationRequest, OperationType, SuccessResult
from ..payload import get_field, to_plain
from ..storage import AssetStorageClient
from .base import OperationHandler

DEFAULT_MAX_TOKENS = 1000
DEFAULT_COMPLETION_MODEL = "gpt-3.5-turbo-instruct"
DEFAULT_AUDIO_MODEL = "whisper-1"

SAMPLING_OPTIONS = ("temperature", "top_p", "frequency_penalty", "presence_penalty")


def sampling_params(request: OperationRequest) -> Dict[str, Any]:
    params: Dict[str, Any] = {"max_tokens": request.max_tokens or DEFAULT_MAX_TOKENS}
    for name in SAMPLING_OPTIONS:
        value = getattr(request, name)
        if value is not None:
            params[name] = value
    return params


class ChatCompletionHandler(OperationHandler):
    """Chat Completions API call."""

    operation_type = OperationType.CHAT_COMPLETION
    required_fields = ("user_message",)
    option_fields = ("user_message", "system_message", "max_tokens") + SAMPLING_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.user_message,
            "User message is required for chat completion",
            "user_message",
        )

        messages = []
        if request.system_message:
            messages.append({"role": "system", "content": request.system_message})
        messages.append({"role": "user", "content": request.user_message})

        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "messages": messages,
        }
        payload.update(sampling_params(request))
        return payload

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        response = await client.chat.completions.create(**payload)
        choices = get_field(response, "choices") or []
        choice = choices[0] if choices else None
        message = get_field(choice, "message") if choice is not None else None
        return SuccessResult(
            data={
                "content": (get_field(message, "content") if message else None) or "",
                "model": get_field(response, "model"),
                "usage": to_plain(get_field(response, "usage")),
                "finish_reason": get_field(choice, "finish_reason") if choice else None,
            }
        )


class CompletionHandler(OperationHandler):
    """Legacy text Completions API call."""

    operation_type = OperationType.COMPLETION
    required_fields = ("prompt",)
    option_fields = ("prompt", "max_tokens") + SAMPLING_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(request.prompt, "Prompt is required for text completion", "prompt")

        model = self.resolve_model(request)
        payload: Dict[str, Any] = {
            "model": model if "instruct" in model else DEFAULT_COMPLETION_MODEL,
            "prompt": request.prompt,
        }
        payload.update(sampling_params(request))
        return payload

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        response = await client.completions.create(**payload)
        choices = get_field(response, "choices") or []
        choice = choices[0] if choices else None
        return SuccessResult(
            data={
                "content": (get_field(choice, "text") if choice else None) or "",
                "model": get_field(response, "model"),
                "usage": to_plain(get_field(response, "usage")),
                "finish_reason": get_field(choice, "finish_reason") if choice else None,
            }
        )


class AudioTranscriptionHandler(OperationHandler):
    """Speech to text for a file stored by the host."""

    operation_type = OperationType.AUDIO_TRANSCRIPTION
    required_fields = ("audio_file",)
    option_fields = ("audio_file", "audio_language", "audio_response_format")
    action = "transcription"

    def __init__(
        self,
        settings: Settings,
        logger: LoggerService,
        storage: AssetStorageClient,
    ) -> None:
        """Initialize audio handler.

        Args:
            settings: Settings instance
            logger: Logger service instance
            storage: Host asset storage client
        """
        super().__init__(settings=settings, logger=logger)
        self.storage = storage

    def resolve_model(self, request: OperationRequest) -> str:
        model = request.model or ""
        if "whisper" in model or "transcribe" in model:
            return model
        return DEFAULT_AUDIO_MODEL

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.audio_file,
            f"Audio file is required for audio {self.action}",
            "audio_file",
        )
        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "response_format": request.audio_response_format,
        }
        if request.audio_language:
            payload["language"] = request.audio_language
        return payload

    def _endpoint(self, client: Any) -> Any:
        return client.audio.transcriptions

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        filename, content = await self.storage.fetch(request.audio_file or "")
        response = await self._endpoint(client).create(
            file=(filename, content),
            **payload,
        )
        text = response if isinstance(response, str) else get_field(response, "text", "")
        return SuccessResult(
            data={
                "text": text,
                "model": payload["model"],
                "response_format": payload["response_format"],
            }
        )


class AudioTranslationHandler(AudioTranscriptionHandler):
    """Speech to English text for a file stored by the host."""

    operation_type = OperationType.AUDIO_TRANSLATION
    option_fields = ("audio_file", "audio_response_format")
    action = "translation"

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        payload = super().prepare(request)
        # The translations endpoint always targets English
        payload.pop("language", None)
        return payload

    def _endpoint(self, client: Any) -> Any:
        return client.audio.translations
