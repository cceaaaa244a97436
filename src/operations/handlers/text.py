"""Text generation handler."""
from typing import Any, Dict, List

from ..models import OperationRequest, OperationType
from ..payload import build_input, conversation_params, text_format
from .base import CONVERSATION_OPTIONS, RESPONSE_SHAPE_OPTIONS, ResponsesHandler


class TextGenerationHandler(ResponsesHandler):
    """Plain text generation, optionally grounded with web search."""

    operation_type = OperationType.TEXT_GENERATION
    required_fields = ("user_message",)
    option_fields = (
        "user_message",
        "system_message_text",
        "enable_web_search",
        "temperature",
    ) + RESPONSE_SHAPE_OPTIONS + CONVERSATION_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.user_message,
            "User message is required for text generation",
            "user_message",
        )

        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "input": build_input(request.user_message, request.system_message_text),
            "max_output_tokens": self.resolve_max_output_tokens(request),
        }

        tools: List[Dict[str, Any]] = []
        if request.enable_web_search:
            tools.append({"type": "web_search_preview"})
        if tools:
            payload["tools"] = tools

        if request.temperature is not None:
            payload["temperature"] = request.temperature

        text = text_format(request, "response")
        if text:
            payload["text"] = text

        payload.update(conversation_params(request))
        return payload
