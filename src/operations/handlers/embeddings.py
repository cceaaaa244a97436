"""Embeddings, moderation and model listing handlers."""
from typing import Any, Dict

from ..models import OperationRequest, OperationType, SuccessResult
from ..payload import get_field, to_plain
from .base import OperationHandler

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
MODERATION_MODEL = "omni-moderation-latest"


class EmbeddingsHandler(OperationHandler):
    """Text embeddings."""

    operation_type = OperationType.EMBEDDINGS
    required_fields = ("text_input",)
    option_fields = ("text_input",)

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(request.text_input, "Text is required for embeddings", "text_input")
        model = self.resolve_model(request)
        return {
            "model": model if "embedding" in model else DEFAULT_EMBEDDING_MODEL,
            "input": request.text_input,
        }

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        response = await client.embeddings.create(**payload)
        embeddings = [
            {
                "index": get_field(item, "index"),
                "embedding": list(get_field(item, "embedding") or []),
            }
            for item in get_field(response, "data") or []
        ]
        return SuccessResult(
            data={
                "embeddings": embeddings,
                "model": get_field(response, "model"),
                "usage": to_plain(get_field(response, "usage")),
            }
        )


class ModerationHandler(OperationHandler):
    """Content moderation, always on the latest multimodal moderation model."""

    operation_type = OperationType.MODERATION
    required_fields = ("text_input",)
    option_fields = ("text_input",)

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(request.text_input, "Text is required for moderation", "text_input")
        return {"model": MODERATION_MODEL, "input": request.text_input}

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        response = await client.moderations.create(**payload)
        results = to_plain(get_field(response, "results")) or []
        first = results[0] if results else {}
        return SuccessResult(
            data={
                "results": results,
                "model": get_field(response, "model"),
                "flagged": bool(first.get("flagged", False)),
                "categories": first.get("categories") or {},
                "category_scores": first.get("category_scores") or {},
            }
        )


class ListModelsHandler(OperationHandler):
    """Models available to the API key."""

    operation_type = OperationType.LIST_MODELS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        return {}

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        page = await client.models.list()
        models = [
            {
                "id": get_field(model, "id"),
                "created": get_field(model, "created"),
                "owned_by": get_field(model, "owned_by"),
            }
            for model in get_field(page, "data") or []
        ]
        return SuccessResult(data={"models": models})
