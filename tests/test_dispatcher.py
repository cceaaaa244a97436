from __future__ import annotations

import pytest

from conftest import FakeOpenAI, response_payload
from operations.content import INVALID_BASE64_MESSAGE
from operations.models import ErrorResult, OperationRequest, SuccessResult
from operations.payload import JSON_SCHEMA_REQUIRED_MESSAGE


class RateLimitError(Exception):
    pass


MISSING_FIELD_CASES = [
    ("text_generation", {}, "User message is required for text generation"),
    ("image_generation", {}, "Image description is required for image generation"),
    ("image_analysis", {}, "Image URL or image base64 is required for image analysis"),
    ("file_search", {}, "Search query is required for file search"),
    (
        "file_search",
        {"search_query": "refund policy"},
        "Vector store IDs are required for file search",
    ),
    (
        "file_search_with_image",
        {"search_query": "what is this", "vector_store_ids": "vs_1"},
        "Image URL or image base64 is required for file search with image",
    ),
    ("code_interpreter", {}, "Code input is required for code interpretation"),
    ("embeddings", {}, "Text is required for embeddings"),
    ("moderation", {}, "Text is required for moderation"),
    ("file_analysis", {}, "File URL or file base64 is required for file analysis"),
    (
        "file_analysis_with_vector_search",
        {"file_url": "https://example.com/a.pdf"},
        "File base64 is required for file analysis with vector search",
    ),
    (
        "file_analysis_with_vector_search",
        {"file_base64": "JVBERi0xLjQK"},
        "Vector store IDs are required for file analysis with vector search",
    ),
    ("chat_completion", {}, "User message is required for chat completion"),
    ("completion", {}, "Prompt is required for text completion"),
    ("audio_transcription", {}, "Audio file is required for audio transcription"),
    ("audio_translation", {}, "Audio file is required for audio translation"),
]


@pytest.mark.parametrize("operation_type,options,message", MISSING_FIELD_CASES)
async def test_missing_required_field_fails_before_any_client(
    dispatcher, client_factory, operation_type: str, options: dict, message: str
) -> None:
    result = await dispatcher.execute(
        {"api_key": "sk-test", "operation_type": operation_type, **options}
    )

    assert isinstance(result, ErrorResult)
    assert result.error.type == "ConfigurationError"
    assert result.error.message == message
    assert result.error.operation_type == operation_type
    assert client_factory.api_keys == []


async def test_blank_values_count_as_missing(dispatcher, client_factory) -> None:
    result = await dispatcher.execute(
        {"api_key": "sk-test", "operation_type": "embeddings", "text_input": "   "}
    )

    assert result.success is False
    assert result.error.message == "Text is required for embeddings"
    assert client_factory.api_keys == []


async def test_missing_api_key(dispatcher, client_factory) -> None:
    result = await dispatcher.execute({"user_message": "hi"})

    assert result.to_payload() == {
        "success": False,
        "error": {
            "message": "OpenAI API key is required",
            "type": "ConfigurationError",
            "operation_type": "text_generation",
            "model": "gpt-4o-mini",
        },
    }
    assert client_factory.api_keys == []


async def test_api_key_falls_back_to_settings(dispatcher, client_factory, settings) -> None:
    settings.OPENAI_API_KEY = "sk-from-env"

    result = await dispatcher.execute({"user_message": "hi"})

    assert result.success is True
    assert client_factory.api_keys == ["sk-from-env"]


async def test_unknown_operation_type_keeps_raw_tag(dispatcher, client_factory) -> None:
    result = await dispatcher.execute({"api_key": "sk-test", "operation_type": "teleport"})

    assert result.error.type == "ConfigurationError"
    assert result.error.message == "Unknown operation type: teleport"
    assert result.error.operation_type == "teleport"
    assert client_factory.api_keys == []


async def test_out_of_range_option_is_a_validation_error(dispatcher) -> None:
    result = await dispatcher.execute(
        {"api_key": "sk-test", "user_message": "hi", "temperature": 5}
    )

    assert result.error.type == "ValidationError"
    assert result.error.message.startswith("Invalid option 'temperature'")


async def test_missing_json_schema_is_a_configuration_error(
    dispatcher, client_factory
) -> None:
    result = await dispatcher.execute(
        {
            "api_key": "sk-test",
            "user_message": "hi",
            "response_format": "json_schema",
        }
    )

    assert result.error.type == "ConfigurationError"
    assert result.error.message == JSON_SCHEMA_REQUIRED_MESSAGE
    assert client_factory.api_keys == []


async def test_malformed_image_base64_is_a_validation_error(
    dispatcher, client_factory
) -> None:
    result = await dispatcher.execute(
        {
            "api_key": "sk-test",
            "operation_type": "image_analysis",
            "image_base64": "definitely not base64!",
        }
    )

    assert result.error.type == "ValidationError"
    assert result.error.message == INVALID_BASE64_MESSAGE
    assert client_factory.api_keys == []


async def test_success_envelope_carries_response_id(dispatcher, openai_client) -> None:
    result = await dispatcher.execute({"api_key": "sk-test", "user_message": "hi"})

    assert isinstance(result, SuccessResult)
    assert result.to_payload() == {
        "success": True,
        "data": {
            "content": "Hello there",
            "model": "gpt-4o-mini",
            "usage": {"input_tokens": 10, "output_tokens": 5, "total_tokens": 15},
            "finish_reason": "completed",
            "response_format": "text",
        },
        "response_id": "resp_123",
    }
    assert openai_client.closed is True


async def test_previous_response_id_is_forwarded(dispatcher, openai_client) -> None:
    await dispatcher.execute(
        {
            "api_key": "sk-test",
            "user_message": "and then?",
            "previous_response_id": "resp_prev",
            "store_response": False,
        }
    )

    [sent] = openai_client.kwargs_of("responses.create")
    assert sent["previous_response_id"] == "resp_prev"
    assert sent["store"] is False


async def test_upstream_error_is_reported_by_class_name(
    dispatcher, openai_client
) -> None:
    openai_client.results["responses.create"] = RateLimitError("Rate limit reached")

    result = await dispatcher.execute(
        {"api_key": "sk-test", "user_message": "hi", "model": "gpt-4.1"}
    )

    assert result.to_payload()["error"] == {
        "message": "Rate limit reached",
        "type": "RateLimitError",
        "operation_type": "text_generation",
        "model": "gpt-4.1",
    }
    assert openai_client.closed is True


async def test_other_variant_fields_do_not_bleed(dispatcher, openai_client) -> None:
    await dispatcher.execute(
        {
            "api_key": "sk-test",
            "user_message": "hi",
            "system_message_image": "You are an image analyst",
            "system_message": "legacy prompt",
            "search_query": "ignored",
        }
    )

    [sent] = openai_client.kwargs_of("responses.create")
    assert sent["input"] == [{"role": "user", "content": "hi"}]
    assert "tools" not in sent


async def test_embeddings_ignore_response_format_of_other_variants(
    dispatcher, openai_client
) -> None:
    openai_client.results["embeddings.create"] = {"data": [], "model": "m"}

    result = await dispatcher.execute(
        {
            "api_key": "sk-test",
            "operation_type": "embeddings",
            "text_input": "hello",
            "response_format": "json",
        }
    )

    assert result.success is True
    [sent] = openai_client.kwargs_of("embeddings.create")
    assert "response_format" not in sent


async def test_text_generation_ignores_image_options(dispatcher, openai_client) -> None:
    result = await dispatcher.execute(
        {"api_key": "sk-test", "user_message": "hi", "image_size": "1536x1024"}
    )

    assert result.success is True
    assert len(openai_client.kwargs_of("responses.create")) == 1


async def test_moderation_ignores_sampling_options(dispatcher, openai_client) -> None:
    openai_client.results["moderations.create"] = {"results": [], "model": "m"}

    result = await dispatcher.execute(
        {
            "api_key": "sk-test",
            "operation_type": "moderation",
            "text_input": "hello",
            "top_p": 3,
        }
    )

    assert result.success is True
    [sent] = openai_client.kwargs_of("moderations.create")
    assert sent == {"model": "omni-moderation-latest", "input": "hello"}


async def test_chat_completion_ignores_audio_response_format(
    dispatcher, openai_client
) -> None:
    openai_client.results["chat.completions.create"] = {"choices": [], "model": "m"}

    result = await dispatcher.execute(
        {
            "api_key": "sk-test",
            "operation_type": "chat_completion",
            "user_message": "hi",
            "response_format": "json",
        }
    )

    assert result.success is True
    [sent] = openai_client.kwargs_of("chat.completions.create")
    assert "response_format" not in sent


async def test_missing_api_key_is_reported_before_option_errors(
    dispatcher, client_factory
) -> None:
    result = await dispatcher.execute(
        {"operation_type": "moderation", "text_input": "hello", "top_p": 3}
    )

    assert result.error.type == "ConfigurationError"
    assert result.error.message == "OpenAI API key is required"
    assert client_factory.api_keys == []


async def test_operation_type_is_trimmed(dispatcher, openai_client) -> None:
    openai_client.results["embeddings.create"] = {"data": [], "model": "m"}

    result = await dispatcher.execute(
        {"api_key": "sk-test", "operation_type": "embeddings ", "text_input": "hello"}
    )

    assert result.success is True
    assert len(openai_client.kwargs_of("embeddings.create")) == 1


async def test_accepts_request_model(dispatcher, openai_client) -> None:
    request = OperationRequest(api_key="sk-test", user_message="hi")

    result = await dispatcher.execute(request)

    assert result.success is True
    assert len(openai_client.kwargs_of("responses.create")) == 1


async def test_empty_options_fail_cleanly(dispatcher) -> None:
    result = await dispatcher.execute(None)

    assert result.success is False
    assert result.error.operation_type == "text_generation"


async def test_each_call_gets_its_own_client(
    settings, logger_service, handler_factory
) -> None:
    from operations.dispatcher import OperationDispatcher

    built = []

    def factory(api_key: str) -> FakeOpenAI:
        client = FakeOpenAI({"responses.create": response_payload()})
        built.append(client)
        return client

    dispatcher = OperationDispatcher(
        settings=settings,
        logger=logger_service,
        handler_factory=handler_factory,
        client_factory=factory,
    )
    await dispatcher.execute({"api_key": "sk-a", "user_message": "one"})
    await dispatcher.execute({"api_key": "sk-b", "user_message": "two"})

    assert len(built) == 2
    assert all(client.closed for client in built)
