from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest
from pydantic import BaseModel

from operations.errors import ConfigurationError, ValidationError
from operations.models import OperationRequest
from operations.payload import (
    JSON_SCHEMA_REQUIRED_MESSAGE,
    build_input,
    conversation_params,
    image_generation_tool,
    text_format,
    to_plain,
)

SCHEMA = {"type": "object", "properties": {"answer": {"type": "string"}}}


def test_plain_text_needs_no_format() -> None:
    assert text_format(OperationRequest(), "response") is None


def test_json_object_format() -> None:
    request = OperationRequest(response_format="json_object")

    assert text_format(request, "response") == {"format": {"type": "json_object"}}


@pytest.mark.parametrize(
    "schema",
    [SCHEMA, '{"type": "object", "properties": {"answer": {"type": "string"}}}'],
)
def test_json_schema_format_accepts_object_or_text(schema) -> None:
    request = OperationRequest(response_format="json_schema", json_schema=schema)

    assert text_format(request, "analysis_response") == {
        "format": {
            "type": "json_schema",
            "name": "analysis_response",
            "schema": SCHEMA,
            "strict": True,
        }
    }


def test_json_schema_format_without_schema_is_a_configuration_error() -> None:
    request = OperationRequest(response_format="json_schema")

    with pytest.raises(ConfigurationError) as excinfo:
        text_format(request, "response")

    assert excinfo.value.message == JSON_SCHEMA_REQUIRED_MESSAGE


@pytest.mark.parametrize("schema", ["{not json", "[1, 2]"])
def test_malformed_json_schema_is_a_validation_error(schema: str) -> None:
    request = OperationRequest(response_format="json_schema", json_schema=schema)

    with pytest.raises(ValidationError):
        text_format(request, "response")


def test_build_input_puts_system_message_first() -> None:
    assert build_input("hi", "be brief") == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hi"},
    ]
    assert build_input("hi") == [{"role": "user", "content": "hi"}]


@pytest.mark.parametrize(
    "size,quality,expected_size,expected_quality",
    [
        ("1024x1024", "standard", "1024x1024", "medium"),
        ("1792x1024", "hd", "1536x1024", "high"),
        ("1024x1792", "standard", "1024x1536", "medium"),
        ("256x256", "hd", "1024x1024", "high"),
    ],
)
def test_image_tool_normalizes_size_and_quality(
    size: str, quality: str, expected_size: str, expected_quality: str
) -> None:
    request = OperationRequest(image_size=size, image_quality=quality)

    assert image_generation_tool(request) == {
        "type": "image_generation",
        "size": expected_size,
        "quality": expected_quality,
    }


def test_conversation_params() -> None:
    assert conversation_params(OperationRequest()) == {"store": True}
    assert conversation_params(
        OperationRequest(store_response=False, previous_response_id="resp_1")
    ) == {"store": False, "previous_response_id": "resp_1"}


def test_to_plain_handles_models_and_objects() -> None:
    class Usage(BaseModel):
        input_tokens: int
        cached: Optional[int] = None

    value = SimpleNamespace(usage=Usage(input_tokens=3), items=[SimpleNamespace(id="a")])

    assert to_plain(value) == {"usage": {"input_tokens": 3}, "items": [{"id": "a"}]}
