"""Image generation and image analysis handlers."""
from typing import Any, Dict

from ..models import OperationRequest, OperationType, SuccessResult
from ..payload import (
    build_input,
    conversation_params,
    get_field,
    image_generation_tool,
    input_image,
    input_text,
    text_format,
    to_plain,
)
from .base import (
    CONVERSATION_OPTIONS,
    RESPONSE_SHAPE_OPTIONS,
    ResponsesHandler,
    output_items,
)

DEFAULT_ANALYSIS_PROMPT = (
    "Please analyze this image and describe what you see, including any text, "
    "objects, colors, composition, and other notable features."
)


class ImageGenerationHandler(ResponsesHandler):
    """Image generation.

    DALL-E models go through the Images API, where style applies. Every other
    model drives the Responses API image generation tool.
    """

    operation_type = OperationType.IMAGE_GENERATION
    required_fields = ("image_prompt",)
    option_fields = (
        "image_prompt",
        "image_size",
        "image_quality",
        "image_style",
    ) + CONVERSATION_OPTIONS

    @staticmethod
    def _uses_images_api(model: str) -> bool:
        return "dall-e" in model

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require(
            request.image_prompt,
            "Image description is required for image generation",
            "image_prompt",
        )

        model = self.resolve_model(request)
        if self._uses_images_api(model):
            payload: Dict[str, Any] = {
                "model": model,
                "prompt": request.image_prompt,
                "size": request.image_size,
                "n": 1,
            }
            if model == "dall-e-3":
                payload["quality"] = request.image_quality
                payload["style"] = request.image_style
            return payload

        payload = {
            "model": model,
            "input": build_input(request.image_prompt),
            "tools": [image_generation_tool(request)],
        }
        payload.update(conversation_params(request))
        return payload

    def project(self, response: Any, request: OperationRequest) -> Dict[str, Any]:
        images = [
            {
                "id": item.get("id"),
                "status": item.get("status"),
                "result": item.get("result"),
                "revised_prompt": item.get("revised_prompt"),
            }
            for item in output_items(response, "image_generation_call")
        ]
        return {
            "images": images,
            "model": get_field(response, "model"),
            "usage": to_plain(get_field(response, "usage")),
        }

    async def call(
        self, client: Any, request: OperationRequest, payload: Dict[str, Any]
    ) -> SuccessResult:
        if "prompt" not in payload:
            return await super().call(client, request, payload)

        response = await client.images.generate(**payload)
        images = [
            {
                "url": get_field(image, "url"),
                "b64_json": get_field(image, "b64_json"),
                "revised_prompt": get_field(image, "revised_prompt"),
            }
            for image in get_field(response, "data") or []
        ]
        return SuccessResult(
            data={
                "images": images,
                "model": payload["model"],
                "usage": to_plain(get_field(response, "usage")),
            }
        )


class ImageAnalysisHandler(ResponsesHandler):
    """Vision analysis of a single image."""

    operation_type = OperationType.IMAGE_ANALYSIS
    required_fields = ("image_url", "image_base64")
    option_fields = (
        "image_url",
        "image_base64",
        "analysis_prompt",
        "system_message_image",
    ) + RESPONSE_SHAPE_OPTIONS + CONVERSATION_OPTIONS

    def prepare(self, request: OperationRequest) -> Dict[str, Any]:
        self.require_any(
            [request.image_url, request.image_base64],
            "Image URL or image base64 is required for image analysis",
            "image_url",
        )

        content = [
            input_text(request.analysis_prompt or DEFAULT_ANALYSIS_PROMPT),
            input_image(request),
        ]
        payload: Dict[str, Any] = {
            "model": self.resolve_model(request),
            "input": build_input(content, request.system_message_image),
            "max_output_tokens": self.resolve_max_output_tokens(request),
        }

        text = text_format(request, "analysis_response")
        if text:
            payload["text"] = text

        payload.update(conversation_params(request))
        return payload
