"""Shared request payload builders for the Responses API."""
import json
from typing import Any, Dict, List, Mapping, Optional, Union

from .content import image_data_url
from .errors import ConfigurationError, ValidationError
from .models import OperationRequest

JSON_SCHEMA_REQUIRED_MESSAGE = (
    "JSON schema is required when response format is json_schema"
)

# Responses API image tool only accepts these sizes
IMAGE_TOOL_SIZES = {
    "1024x1024": "1024x1024",
    "1792x1024": "1536x1024",
    "1024x1792": "1024x1536",
    "512x512": "1024x1024",
    "256x256": "1024x1024",
}
IMAGE_TOOL_QUALITY = {"standard": "medium", "hd": "high"}

InputContent = Union[str, List[Dict[str, Any]]]


def build_input(
    user_content: InputContent,
    system_message: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Build a Responses API input list.

    Args:
        user_content: User message text or content parts
        system_message: Optional variant-specific system message

    Returns:
        Input message list
    """
    messages: List[Dict[str, Any]] = []
    if system_message:
        messages.append({"role": "system", "content": system_message})
    messages.append({"role": "user", "content": user_content})
    return messages


def input_text(text: str) -> Dict[str, Any]:
    return {"type": "input_text", "text": text}


def input_image(request: OperationRequest) -> Dict[str, Any]:
    """Build the image content part from image_url or image_base64.

    Raises:
        ValidationError: If image_base64 is not valid base64
    """
    if request.image_url:
        url = request.image_url
    else:
        url = image_data_url(request.image_base64 or "", field="image_base64")
    return {"type": "input_image", "image_url": url, "detail": "high"}


def resolve_json_schema(value: Any) -> Dict[str, Any]:
    """Return the JSON schema object, parsing JSON text when needed.

    Raises:
        ConfigurationError: If no schema was supplied
        ValidationError: If the schema is not a JSON object
    """
    if value is None:
        raise ConfigurationError(JSON_SCHEMA_REQUIRED_MESSAGE, field="json_schema")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            raise ValidationError(
                "JSON schema must be valid JSON", field="json_schema"
            ) from None
    if not isinstance(value, Mapping):
        raise ValidationError("JSON schema must be a JSON object", field="json_schema")
    return dict(value)


def text_format(request: OperationRequest, schema_name: str) -> Optional[Dict[str, Any]]:
    """Build the response-shaping directive for the selected response format.

    Args:
        request: Operation request
        schema_name: Name the upstream attaches to the structured output

    Returns:
        Value for the ``text`` parameter, or None for plain text
    """
    if request.response_format == "json_object":
        return {"format": {"type": "json_object"}}
    if request.response_format == "json_schema":
        return {
            "format": {
                "type": "json_schema",
                "name": schema_name,
                "schema": resolve_json_schema(request.json_schema),
                "strict": True,
            }
        }
    return None


def file_search_tool(vector_store_ids: List[str]) -> Dict[str, Any]:
    return {"type": "file_search", "vector_store_ids": list(vector_store_ids)}


def image_generation_tool(request: OperationRequest) -> Dict[str, Any]:
    return {
        "type": "image_generation",
        "size": IMAGE_TOOL_SIZES.get(request.image_size, "auto"),
        "quality": IMAGE_TOOL_QUALITY.get(request.image_quality, "auto"),
    }


def conversation_params(request: OperationRequest) -> Dict[str, Any]:
    """Storage flag and conversation handle shared by Responses API calls."""
    params: Dict[str, Any] = {"store": request.store_response}
    if request.previous_response_id:
        params["previous_response_id"] = request.previous_response_id
    return params


def to_plain(value: Any) -> Any:
    """Convert SDK objects into plain JSON-compatible structures."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        return {str(key): to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if hasattr(value, "__dict__"):
        return {
            key: to_plain(item)
            for key, item in vars(value).items()
            if not key.startswith("_")
        }
    return str(value)


def get_field(value: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK object or a plain mapping."""
    if isinstance(value, Mapping):
        return value.get(name, default)
    return getattr(value, name, default)
