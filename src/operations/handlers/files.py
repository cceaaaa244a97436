"""File search and file analysis handlers."""
import base64
import binascii
from typing import Any, Dict, List, Tuple

from ..content import (
    INVALID_BASE64_MESSAGE,
    default_file_name,
    guess_mime_type_from_name,
    resolve_file_content,
)
from ..errors import ValidationError
from ..models import OperationRequest, OperationType, SuccessResult
from ..payload import (
    build_input,
    conversation_params,
    file_search_tool,
    get_field,
    input_image,
    input_text,
    text_format,
    to_plain,
)
from .base import CONVERSATION_OPTIONS, RESPONSE_SHAPE_OPTIONS, ResponsesHandler

DEFAULT_FILE_ANALYSIS_PROMPT = (
    "Please analyze this file and summarize its content, structure, and any "
    "notable details."
)


class FileSearchHandler(ResponsesHandler):
    """Question answering over vector stores."""

    operation_type = OperationType.FILE_SEARCH
    required_fields = ("search_query", "vector_store_ids")
    option_fields = (
        "search_query",
        "vector_store_ids",
        "system_message_file",
    ) + CONVERSATION_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.search_query,
            "Search query is required for file search",
            "search_query",
        )
        self.require(
            request.vector_store_ids,
            "Vector store IDs are required for file search",
            "vector_store_ids",
        )

        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "input": build_input(request.search_query, request.system_message_file),
            "tools": [file_search_tool(request.vector_store_ids or [])],
        }
        payload.update(conversation_params(request))
        return payload

    def project(self, response: Any, request: OperationRequest) -> Dict[str, Any]:
        return {
            "content": get_field(response, "output_text") or "",
            "model": get_field(response, "model"),
            "usage": to_plain(get_field(response, "usage")),
        }


class FileSearchWithImageHandler(ResponsesHandler):
    """Vector store search driven by a text query and an image."""

    operation_type = OperationType.FILE_SEARCH_WITH_IMAGE
    required_fields = ("search_query", "vector_store_ids", "image_url", "image_base64")
    option_fields = (
        "search_query",
        "vector_store_ids",
        "image_url",
        "image_base64",
        "system_message_file_image",
    ) + RESPONSE_SHAPE_OPTIONS + CONVERSATION_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.search_query,
            "Search query is required for file search with image",
            "search_query",
        )
        self.require(
            request.vector_store_ids,
            "Vector store IDs are required for file search with image",
            "vector_store_ids",
        )
        self.require_any(
            [request.image_url, request.image_base64],
            "Image URL or image base64 is required for file search with image",
            "image_url",
        )

        content = [input_text(request.search_query or ""), input_image(request)]
        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "input": build_input(content, request.system_message_file_image),
            "tools": [file_search_tool(request.vector_store_ids or [])],
            "max_output_tokens": self.resolve_max_output_tokens(request),
        }

        text = text_format(request, "file_search_with_image_response")
        if text:
            payload["text"] = text

        payload.update(conversation_params(request))
        return payload


class FileAnalysisHandler(ResponsesHandler):
    """Analysis of a single inline or linked file."""

    operation_type = OperationType.FILE_ANALYSIS
    required_fields = ("file_url", "file_base64")
    option_fields = (
        "file_url",
        "file_base64",
        "file_name",
        "file_mime_type",
        "analysis_prompt",
        "system_message_file_analysis",
    ) + RESPONSE_SHAPE_OPTIONS + CONVERSATION_OPTIONS
    schema_name = "file_analysis_response"

    def _check_file(self, request: OperationRequest) -> None:
        self.require_any(
            [request.file_url, request.file_base64],
            "File URL or file base64 is required for file analysis",
            "file_url",
        )

    @staticmethod
    def _decode(request: OperationRequest) -> Tuple[bytes, str, str]:
        """Decode file_base64 into (content, MIME type, file name).

        Raises:
            ValidationError: If the payload is not valid base64
        """
        cleaned, mime_type = resolve_file_content(
            request.file_base64 or "",
            file_name=request.file_name,
            mime_type=request.file_mime_type,
        )
        try:
            content = base64.b64decode(cleaned, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError(INVALID_BASE64_MESSAGE, field="file_base64") from None
        return content, mime_type, request.file_name or default_file_name(mime_type)

    def _file_part(self, request: OperationRequest) -> Dict[str, Any]:
        if request.file_base64:
            content, mime_type, file_name = self._decode(request)
            encoded = base64.b64encode(content).decode("ascii")
            if mime_type.startswith("image/"):
                return {
                    "type": "input_image",
                    "image_url": f"data:{mime_type};base64,{encoded}",
                    "detail": "high",
                }
            return {
                "type": "input_file",
                "filename": file_name,
                "file_data": f"data:{mime_type};base64,{encoded}",
            }

        url = request.file_url or ""
        mime_type = request.file_mime_type or guess_mime_type_from_name(
            request.file_name or url.split("?", 1)[0]
        )
        if mime_type and mime_type.startswith("image/"):
            return {"type": "input_image", "image_url": url, "detail": "high"}
        return {"type": "input_file", "file_url": url}

    def _base_payload(
        self, request: OperationRequest, content: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "input": build_input(content, request.system_message_file_analysis),
            "max_output_tokens": self.resolve_max_output_tokens(request),
        }
        text = text_format(request, self.schema_name)
        if text:
            payload["text"] = text
        payload.update(conversation_params(request))
        return payload

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self._check_file(request)
        content = [
            input_text(request.analysis_prompt or DEFAULT_FILE_ANALYSIS_PROMPT),
            self._file_part(request),
        ]
        return self._base_payload(request, content)


class FileAnalysisWithVectorSearchHandler(FileAnalysisHandler):
    """File analysis that also searches vector stores.

    The file is uploaded to the provider's file store for the duration of the
    call and deleted afterwards on a best-effort basis.
    """

    operation_type = OperationType.FILE_ANALYSIS_WITH_VECTOR_SEARCH
    required_fields = ("file_base64", "vector_store_ids")
    option_fields = (
        "file_base64",
        "vector_store_ids",
        "file_name",
        "file_mime_type",
        "analysis_prompt",
        "system_message_file_analysis",
    ) + RESPONSE_SHAPE_OPTIONS + CONVERSATION_OPTIONS
    schema_name = "file_analysis_with_vector_search_response"

    def _check_file(self, request: OperationRequest) -> None:
        self.require(
            request.file_base64,
            "File base64 is required for file analysis with vector search",
            "file_base64",
        )
        self.require(
            request.vector_store_ids,
            "Vector store IDs are required for file analysis with vector search",
            "vector_store_ids",
        )

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self._check_file(request)
        self._decode(request)

        content = [input_text(request.analysis_prompt or DEFAULT_FILE_ANALYSIS_PROMPT)]
        payload = self._base_payload(request, content)
        payload["tools"] = [file_search_tool(request.vector_store_ids or [])]
        return payload

    async def _upload(self, client: Any, request: OperationRequest) -> Tuple[str, str]:
        content, mime_type, file_name = self._decode(request)
        purpose = "vision" if mime_type.startswith("image/") else "user_data"
        uploaded = await client.files.create(
            file=(file_name, content, mime_type),
            purpose=purpose,
        )
        return get_field(uploaded, "id"), mime_type

    async def _cleanup(self, client: Any, file_ids: List[str]) -> None:
        for file_id in file_ids:
            try:
                await client.files.delete(file_id)
                self.logger.debug("Deleted uploaded file", extra={"file_id": file_id})
            except Exception as e:
                self.logger.warning(
                    "Failed to delete uploaded file",
                    extra={
                        "file_id": file_id,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        uploaded_ids: List[str] = []
        try:
            file_id, mime_type = await self._upload(client, request)
            uploaded_ids.append(file_id)

            if mime_type.startswith("image/"):
                file_part = {"type": "input_image", "file_id": file_id, "detail": "high"}
            else:
                file_part = {"type": "input_file", "file_id": file_id}
            payload["input"][-1]["content"].append(file_part)

            return await super().call(client, request, payload)
        finally:
            await self._cleanup(client, uploaded_ids)
