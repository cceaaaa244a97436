"""Operation request models.

The option bag arrives flat, exactly as the host form collects it. Every
option beyond the tag is optional here; each handler decides which of them it
requires.
"""
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..content import parse_string_array


class OperationType(str, Enum):
    """Operation type tags."""

    TEXT_GENERATION = "text_generation"
    IMAGE_GENERATION = "image_generation"
    IMAGE_ANALYSIS = "image_analysis"
    FILE_SEARCH = "file_search"
    FILE_SEARCH_WITH_IMAGE = "file_search_with_image"
    CODE_INTERPRETER = "code_interpreter"
    EMBEDDINGS = "embeddings"
    MODERATION = "moderation"
    LIST_MODELS = "list_models"
    FILE_ANALYSIS = "file_analysis"
    FILE_ANALYSIS_WITH_VECTOR_SEARCH = "file_analysis_with_vector_search"
    # Chat Completions era
    CHAT_COMPLETION = "chat_completion"
    COMPLETION = "completion"
    AUDIO_TRANSCRIPTION = "audio_transcription"
    AUDIO_TRANSLATION = "audio_translation"


DEFAULT_OPERATION_TYPE = OperationType.TEXT_GENERATION

ResponseFormat = Literal["text", "json_object", "json_schema"]
AudioResponseFormat = Literal["json", "text", "srt", "vtt"]
ImageSize = Literal["1024x1024", "1792x1024", "1024x1792", "512x512", "256x256"]
ImageQuality = Literal["standard", "hd"]
ImageStyle = Literal["vivid", "natural"]


class OperationRequest(BaseModel):
    """Option bag for a single operation invocation."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    api_key: Optional[str] = Field(None, description="OpenAI API key")
    operation_type: Optional[str] = Field(
        None,
        description="Operation tag, text_generation when unset",
    )
    model: Optional[str] = Field(None, description="Model identifier")

    # Per-variant system messages, never shared between variants
    system_message: Optional[str] = None
    system_message_text: Optional[str] = None
    system_message_image: Optional[str] = None
    system_message_file: Optional[str] = None
    system_message_file_image: Optional[str] = None
    system_message_file_analysis: Optional[str] = None

    user_message: Optional[str] = None
    prompt: Optional[str] = None
    enable_web_search: bool = False
    response_format: ResponseFormat = "text"
    json_schema: Optional[Any] = Field(
        None,
        description="JSON schema object, or its JSON text",
    )

    image_prompt: Optional[str] = None
    image_url: Optional[str] = None
    image_base64: Optional[str] = None
    analysis_prompt: Optional[str] = None

    search_query: Optional[str] = None
    vector_store_ids: Optional[List[str]] = None
    code_input: Optional[str] = None
    text_input: Optional[str] = None

    file_url: Optional[str] = None
    file_base64: Optional[str] = None
    file_name: Optional[str] = None
    file_mime_type: Optional[str] = None

    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    max_output_tokens: Optional[int] = Field(None, ge=1)
    max_tokens: Optional[int] = Field(None, ge=1)

    image_size: ImageSize = "1024x1024"
    image_quality: ImageQuality = "standard"
    image_style: ImageStyle = "vivid"

    audio_file: Optional[str] = Field(None, description="Host file id")
    audio_language: Optional[str] = None
    audio_response_format: AudioResponseFormat = "json"

    store_response: bool = True
    previous_response_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_empty_values(cls, data: Any) -> Any:
        """Treat empty form values as unset."""
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }

    @field_validator("vector_store_ids", mode="before")
    @classmethod
    def parse_vector_store_ids(cls, v: Any) -> Optional[List[str]]:
        """Accept a list or the JSON text the host form produces."""
        if v is None:
            return None
        return parse_string_array(v)
