"""Code interpreter handler."""
from typing import Any, Dict

from ..models import OperationRequest, OperationType
from ..payload import build_input, conversation_params, get_field, to_plain
from .base import (
    CONVERSATION_OPTIONS,
    ResponsesHandler,
    output_annotations,
    output_items,
)


class CodeInterpreterHandler(ResponsesHandler):
    """Runs the request through the hosted code interpreter tool."""

    operation_type = OperationType.CODE_INTERPRETER
    required_fields = ("code_input",)
    option_fields = ("code_input",) + CONVERSATION_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.code_input,
            "Code input is required for code interpretation",
            "code_input",
        )

        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "input": build_input(request.code_input),
            "tools": [{"type": "code_interpreter", "container": {"type": "auto"}}],
        }
        payload.update(conversation_params(request))
        return payload

    def project(self, response: Any, request: OperationRequest) -> Dict[str, Any]:
        # Executed calls first, then the files they produced
        files = output_items(response, "code_interpreter_call")
        files.extend(output_annotations(response, "container_file_citation"))
        return {
            "content": get_field(response, "output_text") or "",
            "files": files,
            "model": get_field(response, "model"),
            "usage": to_plain(get_field(response, "usage")),
        }
