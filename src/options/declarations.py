"""Operation form declarations.

Every field the operation form shows, and when it shows it. The
``operation_type`` choices mirror the dispatcher's operation types one to one.
"""
from typing import Any, Dict, List, Mapping

from operations.models import DEFAULT_OPERATION_TYPE, OperationType
from .conditions import AllOf, Equals, operation_is
from .fields import Choice, FieldType, OptionField, Widget

OT = OperationType

OPERATION_LABELS: Dict[OperationType, str] = {
    OT.TEXT_GENERATION: "Text Generation",
    OT.IMAGE_GENERATION: "Image Generation",
    OT.IMAGE_ANALYSIS: "Image Analysis",
    OT.FILE_SEARCH: "File Search",
    OT.FILE_SEARCH_WITH_IMAGE: "File Search with Image",
    OT.CODE_INTERPRETER: "Code Interpreter",
    OT.EMBEDDINGS: "Text Embeddings",
    OT.MODERATION: "Content Moderation",
    OT.LIST_MODELS: "List Models",
    OT.FILE_ANALYSIS: "File Analysis",
    OT.FILE_ANALYSIS_WITH_VECTOR_SEARCH: "File Analysis with Vector Search",
    OT.CHAT_COMPLETION: "Chat Completion (legacy)",
    OT.COMPLETION: "Text Completion (legacy)",
    OT.AUDIO_TRANSCRIPTION: "Audio Transcription (legacy)",
    OT.AUDIO_TRANSLATION: "Audio Translation (legacy)",
}

MODEL_CHOICES = [
    ("GPT-4.1", "gpt-4.1"),
    ("GPT-4.1 Mini", "gpt-4.1-mini"),
    ("GPT-4o", "gpt-4o"),
    ("GPT-4o Mini", "gpt-4o-mini"),
    ("GPT-4 Turbo", "gpt-4-turbo"),
    ("GPT-3.5 Turbo", "gpt-3.5-turbo"),
    ("GPT-3.5 Turbo Instruct", "gpt-3.5-turbo-instruct"),
    ("Text Embedding 3 Large", "text-embedding-3-large"),
    ("Text Embedding 3 Small", "text-embedding-3-small"),
    ("Text Embedding Ada 002", "text-embedding-ada-002"),
    ("DALL-E 3", "dall-e-3"),
    ("DALL-E 2", "dall-e-2"),
    ("Whisper 1", "whisper-1"),
]

RESPONSE_FORMAT_OPERATIONS = (
    OT.TEXT_GENERATION,
    OT.IMAGE_ANALYSIS,
    OT.FILE_SEARCH_WITH_IMAGE,
    OT.FILE_ANALYSIS,
    OT.FILE_ANALYSIS_WITH_VECTOR_SEARCH,
)
RESPONSES_API_OPERATIONS = (
    OT.TEXT_GENERATION,
    OT.IMAGE_GENERATION,
    OT.IMAGE_ANALYSIS,
    OT.FILE_SEARCH,
    OT.FILE_SEARCH_WITH_IMAGE,
    OT.CODE_INTERPRETER,
    OT.FILE_ANALYSIS,
    OT.FILE_ANALYSIS_WITH_VECTOR_SEARCH,
)
VECTOR_STORE_OPERATIONS = (
    OT.FILE_SEARCH,
    OT.FILE_SEARCH_WITH_IMAGE,
    OT.FILE_ANALYSIS_WITH_VECTOR_SEARCH,
)
IMAGE_INPUT_OPERATIONS = (OT.IMAGE_ANALYSIS, OT.FILE_SEARCH_WITH_IMAGE)
FILE_INPUT_OPERATIONS = (OT.FILE_ANALYSIS, OT.FILE_ANALYSIS_WITH_VECTOR_SEARCH)
ANALYSIS_PROMPT_OPERATIONS = (OT.IMAGE_ANALYSIS,) + FILE_INPUT_OPERATIONS
LEGACY_SAMPLING_OPERATIONS = (OT.CHAT_COMPLETION, OT.COMPLETION)
AUDIO_OPERATIONS = (OT.AUDIO_TRANSCRIPTION, OT.AUDIO_TRANSLATION)
MODEL_OPERATIONS = tuple(
    operation for operation in OT if operation not in (OT.MODERATION, OT.LIST_MODELS)
)


def _when(*operations: OperationType):
    return operation_is(*(operation.value for operation in operations))


def _choices(pairs) -> List[Choice]:
    return [Choice(text=text, value=value) for text, value in pairs]


OPTION_FIELDS: List[OptionField] = [
    OptionField(
        field="api_key",
        name="OpenAI API Key",
        masked=True,
        placeholder="sk-...",
        note="Your OpenAI API key. Keep this secure!",
    ),
    OptionField(
        field="operation_type",
        name="Operation Type",
        interface=Widget.SELECT,
        width="half",
        default=DEFAULT_OPERATION_TYPE.value,
        choices=_choices(
            (label, operation.value) for operation, label in OPERATION_LABELS.items()
        ),
    ),
    OptionField(
        field="model",
        name="Model",
        interface=Widget.SELECT,
        width="half",
        default="gpt-4o-mini",
        choices=_choices(MODEL_CHOICES),
        enabled_when=_when(*MODEL_OPERATIONS),
    ),
    # System messages, one per operation family
    OptionField(
        field="system_message_text",
        name="System Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="You are a helpful assistant...",
        note="Instructions that guide text generation",
        enabled_when=_when(OT.TEXT_GENERATION),
    ),
    OptionField(
        field="system_message_image",
        name="System Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="You are an expert image analyst...",
        note="Instructions that guide image analysis",
        enabled_when=_when(OT.IMAGE_ANALYSIS),
    ),
    OptionField(
        field="system_message_file",
        name="System Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="Answer using only the provided documents...",
        note="Instructions that guide file search",
        enabled_when=_when(OT.FILE_SEARCH),
    ),
    OptionField(
        field="system_message_file_image",
        name="System Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        note="Instructions that guide file search with an image",
        enabled_when=_when(OT.FILE_SEARCH_WITH_IMAGE),
    ),
    OptionField(
        field="system_message_file_analysis",
        name="System Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        note="Instructions that guide file analysis",
        enabled_when=_when(*FILE_INPUT_OPERATIONS),
    ),
    OptionField(
        field="system_message",
        name="System Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="You are a helpful assistant...",
        note="System prompt for chat completions",
        enabled_when=_when(OT.CHAT_COMPLETION),
    ),
    # Primary inputs
    OptionField(
        field="user_message",
        name="User Message",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="Type your message here...",
        note="The message to send to the model",
        enabled_when=_when(OT.TEXT_GENERATION, OT.CHAT_COMPLETION),
    ),
    OptionField(
        field="prompt",
        name="Prompt",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="Enter your prompt...",
        note="Text prompt for completion",
        enabled_when=_when(OT.COMPLETION),
    ),
    OptionField(
        field="enable_web_search",
        name="Enable Web Search",
        type=FieldType.BOOLEAN,
        interface=Widget.BOOLEAN,
        width="half",
        default=False,
        note="Let the model search the web while answering",
        enabled_when=_when(OT.TEXT_GENERATION),
    ),
    OptionField(
        field="image_prompt",
        name="Image Description",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="A detailed description of the image to generate...",
        note="Description of the image to generate",
        enabled_when=_when(OT.IMAGE_GENERATION),
    ),
    OptionField(
        field="image_url",
        name="Image URL",
        placeholder="https://...",
        note="Public URL of the image. Takes precedence over image base64",
        enabled_when=_when(*IMAGE_INPUT_OPERATIONS),
    ),
    OptionField(
        field="image_base64",
        name="Image Base64",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        note="Base64 image data, with or without a data URL prefix",
        enabled_when=_when(*IMAGE_INPUT_OPERATIONS),
    ),
    OptionField(
        field="file_url",
        name="File URL",
        placeholder="https://...",
        note="Public URL of the file. Ignored when file base64 is set",
        enabled_when=_when(OT.FILE_ANALYSIS),
    ),
    OptionField(
        field="file_base64",
        name="File Base64",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        note="Base64 file data, with or without a data URL prefix",
        enabled_when=_when(*FILE_INPUT_OPERATIONS),
    ),
    OptionField(
        field="file_name",
        name="File Name",
        width="half",
        placeholder="report.pdf",
        note="Original file name, used to refine the file type",
        enabled_when=_when(*FILE_INPUT_OPERATIONS),
    ),
    OptionField(
        field="file_mime_type",
        name="File MIME Type",
        width="half",
        placeholder="application/pdf",
        note="Leave empty to detect the type from the file content",
        enabled_when=_when(*FILE_INPUT_OPERATIONS),
    ),
    OptionField(
        field="analysis_prompt",
        name="Analysis Prompt",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="What should the model look for?",
        note="Leave empty for a general description",
        enabled_when=_when(*ANALYSIS_PROMPT_OPERATIONS),
    ),
    OptionField(
        field="search_query",
        name="Search Query",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        note="Question answered from the vector stores",
        enabled_when=_when(OT.FILE_SEARCH, OT.FILE_SEARCH_WITH_IMAGE),
    ),
    OptionField(
        field="vector_store_ids",
        name="Vector Store IDs",
        type=FieldType.CSV,
        interface=Widget.TAGS,
        placeholder="vs_...",
        note="Vector stores to search",
        enabled_when=_when(*VECTOR_STORE_OPERATIONS),
    ),
    OptionField(
        field="code_input",
        name="Code Task",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        placeholder="Calculate the first 20 prime numbers...",
        note="Task or code for the code interpreter",
        enabled_when=_when(OT.CODE_INTERPRETER),
    ),
    OptionField(
        field="text_input",
        name="Text Input",
        type=FieldType.TEXT,
        interface=Widget.INPUT_MULTILINE,
        note="Text to embed or moderate",
        enabled_when=_when(OT.EMBEDDINGS, OT.MODERATION),
    ),
    OptionField(
        field="audio_file",
        name="Audio File",
        type=FieldType.UUID,
        interface=Widget.FILE,
        note="Audio file to transcribe or translate",
        enabled_when=_when(*AUDIO_OPERATIONS),
    ),
    OptionField(
        field="audio_language",
        name="Audio Language",
        width="half",
        placeholder="en",
        note="Language of the audio (ISO 639-1 code)",
        enabled_when=_when(OT.AUDIO_TRANSCRIPTION),
    ),
    OptionField(
        field="audio_response_format",
        name="Transcript Format",
        interface=Widget.SELECT,
        width="half",
        default="json",
        choices=_choices(
            [("JSON", "json"), ("Text", "text"), ("SRT", "srt"), ("VTT", "vtt")]
        ),
        enabled_when=_when(*AUDIO_OPERATIONS),
    ),
    # Output shaping
    OptionField(
        field="response_format",
        name="Response Format",
        interface=Widget.SELECT,
        width="half",
        default="text",
        choices=_choices(
            [
                ("Text", "text"),
                ("JSON Object", "json_object"),
                ("JSON Schema", "json_schema"),
            ]
        ),
        enabled_when=_when(*RESPONSE_FORMAT_OPERATIONS),
    ),
    OptionField(
        field="json_schema",
        name="JSON Schema",
        type=FieldType.JSON,
        interface=Widget.INPUT_CODE,
        note="Schema the structured response must follow",
        enabled_when=AllOf(
            conditions=[
                _when(*RESPONSE_FORMAT_OPERATIONS),
                Equals(field="response_format", value="json_schema"),
            ]
        ),
    ),
    OptionField(
        field="max_output_tokens",
        name="Max Output Tokens",
        type=FieldType.INTEGER,
        width="half",
        default=1000,
        min=1,
        note="Maximum number of tokens to generate",
        enabled_when=_when(*RESPONSE_FORMAT_OPERATIONS),
    ),
    OptionField(
        field="temperature",
        name="Temperature",
        type=FieldType.FLOAT,
        interface=Widget.SLIDER,
        width="half",
        min=0,
        max=2,
        step=0.1,
        note="Controls randomness (0-2). Higher values make output more random",
        enabled_when=_when(OT.TEXT_GENERATION, *LEGACY_SAMPLING_OPERATIONS),
    ),
    OptionField(
        field="max_tokens",
        name="Max Tokens",
        type=FieldType.INTEGER,
        width="half",
        default=1000,
        min=1,
        max=4096,
        note="Maximum number of tokens to generate",
        enabled_when=_when(*LEGACY_SAMPLING_OPERATIONS),
    ),
    OptionField(
        field="top_p",
        name="Top P",
        type=FieldType.FLOAT,
        interface=Widget.SLIDER,
        width="half",
        min=0,
        max=1,
        step=0.01,
        note="Nucleus sampling parameter (0-1)",
        enabled_when=_when(*LEGACY_SAMPLING_OPERATIONS),
    ),
    OptionField(
        field="frequency_penalty",
        name="Frequency Penalty",
        type=FieldType.FLOAT,
        interface=Widget.SLIDER,
        width="half",
        min=-2,
        max=2,
        step=0.1,
        note="Penalty for token frequency (-2 to 2)",
        enabled_when=_when(*LEGACY_SAMPLING_OPERATIONS),
    ),
    OptionField(
        field="presence_penalty",
        name="Presence Penalty",
        type=FieldType.FLOAT,
        interface=Widget.SLIDER,
        width="half",
        min=-2,
        max=2,
        step=0.1,
        note="Penalty for token presence (-2 to 2)",
        enabled_when=_when(*LEGACY_SAMPLING_OPERATIONS),
    ),
    OptionField(
        field="image_size",
        name="Image Size",
        interface=Widget.SELECT,
        width="half",
        default="1024x1024",
        choices=_choices(
            (size, size)
            for size in ("1024x1024", "1792x1024", "1024x1792", "512x512", "256x256")
        ),
        note="Size of the generated image",
        enabled_when=_when(OT.IMAGE_GENERATION),
    ),
    OptionField(
        field="image_quality",
        name="Image Quality",
        interface=Widget.SELECT,
        width="half",
        default="standard",
        choices=_choices([("Standard", "standard"), ("HD", "hd")]),
        note="Quality of the generated image",
        enabled_when=_when(OT.IMAGE_GENERATION),
    ),
    OptionField(
        field="image_style",
        name="Image Style",
        interface=Widget.SELECT,
        width="half",
        default="vivid",
        choices=_choices([("Vivid", "vivid"), ("Natural", "natural")]),
        note="Style of the generated image (DALL-E 3 only)",
        enabled_when=_when(OT.IMAGE_GENERATION),
    ),
    # Conversation state
    OptionField(
        field="store_response",
        name="Store Response",
        type=FieldType.BOOLEAN,
        interface=Widget.BOOLEAN,
        width="half",
        default=True,
        note="Let OpenAI keep the response so later calls can continue from it",
        enabled_when=_when(*RESPONSES_API_OPERATIONS),
    ),
    OptionField(
        field="previous_response_id",
        name="Previous Response ID",
        width="half",
        placeholder="resp_...",
        note="Continue the conversation of an earlier response",
        enabled_when=_when(*RESPONSES_API_OPERATIONS),
    ),
]

FIELDS_BY_NAME: Dict[str, OptionField] = {field.field: field for field in OPTION_FIELDS}

# Inputs summarized in the overview, first non-empty wins
OVERVIEW_INPUT_FIELDS = (
    "user_message",
    "prompt",
    "image_prompt",
    "search_query",
    "code_input",
    "text_input",
    "analysis_prompt",
    "audio_file",
)


def with_defaults(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply declared defaults to the values the host collected."""
    merged = {
        field.field: field.default for field in OPTION_FIELDS if field.default is not None
    }
    for key, value in values.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        merged[key] = value
    return merged


def visible_fields(values: Mapping[str, Any]) -> List[str]:
    """Names of the fields shown for the given option values."""
    merged = with_defaults(values)
    return [field.field for field in OPTION_FIELDS if field.is_visible(merged)]


def host_options() -> List[Dict[str, Any]]:
    """Option declarations in the host's form shape."""
    return [field.to_host_option() for field in OPTION_FIELDS]


def overview(values: Mapping[str, Any]) -> List[Dict[str, str]]:
    """Summary rows the host shows on the operation card."""
    merged = with_defaults(values)
    operation_type = merged.get("operation_type")
    try:
        operation_label = OPERATION_LABELS[OperationType(operation_type)]
    except ValueError:
        operation_label = str(operation_type)

    input_text = next(
        (str(merged[name]) for name in OVERVIEW_INPUT_FIELDS if merged.get(name)),
        "No input provided",
    )
    return [
        {"label": "Operation", "text": operation_label},
        {"label": "Model", "text": str(merged.get("model"))},
        {"label": "Input", "text": input_text},
    ]
