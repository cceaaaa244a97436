"""Inline content helpers.

Base64 payloads arrive without a MIME type more often than not. The type is
guessed from the leading characters of the base64 text, which encode the
file's magic bytes.
"""
import json
import mimetypes
import re
from typing import Any, List, Optional, Tuple

from .errors import ValidationError

SNIFF_PREFIX_LENGTH = 20

# Base64 renderings of well-known magic headers, checked in order
BASE64_SIGNATURES: Tuple[Tuple[str, str], ...] = (
    ("/9j/", "image/jpeg"),
    ("iVBORw0KGgo", "image/png"),
    ("R0lGOD", "image/gif"),
    ("UklGR", "image/webp"),
    ("JVBERi0", "application/pdf"),
    ("UEsDB", "application/zip"),  # PK\x03\x04
)

# ZIP containers that a file name can refine
ZIP_FAMILY_EXTENSIONS = {
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}

DEFAULT_IMAGE_MIME_TYPE = "image/png"
DEFAULT_FILE_MIME_TYPE = "application/octet-stream"

BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
WHITESPACE_PATTERN = re.compile(r"\s+")
DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[^;,]+)?(?:;[^,]*)?,(?P<data>.*)$", re.S)

INVALID_BASE64_MESSAGE = (
    "Invalid base64 format detected. "
    "Please ensure the input is correctly encoded in base64 format."
)


def sniff_mime_type(data: str) -> Optional[str]:
    """Guess a MIME type from the start of base64 text.

    Args:
        data: Base64 text, without a data URL prefix

    Returns:
        MIME type, or None when no signature matches
    """
    header = data.lstrip()[:SNIFF_PREFIX_LENGTH]
    for prefix, mime_type in BASE64_SIGNATURES:
        if header.startswith(prefix):
            return mime_type
    return None


def guess_mime_type_from_name(file_name: Optional[str]) -> Optional[str]:
    if not file_name:
        return None
    lowered = file_name.lower()
    for extension, mime_type in ZIP_FAMILY_EXTENSIONS.items():
        if lowered.endswith(extension):
            return mime_type
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed


def clean_base64(data: str, field: str) -> str:
    """Strip whitespace and check the base64 alphabet.

    Args:
        data: Base64 text
        field: Option name reported on failure

    Returns:
        Base64 text without whitespace

    Raises:
        ValidationError: If the text is not valid base64
    """
    cleaned = WHITESPACE_PATTERN.sub("", data)
    if not cleaned or not BASE64_PATTERN.match(cleaned):
        raise ValidationError(INVALID_BASE64_MESSAGE, field=field)
    return cleaned


def image_data_url(data: str, field: str = "image_base64") -> str:
    """Build an image data URL from base64 text.

    Text that already is an image data URL is returned unchanged.
    """
    if data.startswith("data:image/"):
        return data
    cleaned = clean_base64(data, field)
    mime_type = sniff_mime_type(cleaned)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = DEFAULT_IMAGE_MIME_TYPE
    return f"data:{mime_type};base64,{cleaned}"


def resolve_file_content(
    data: str,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    field: str = "file_base64",
) -> Tuple[str, str]:
    """Resolve base64 file text into clean base64 and a MIME type.

    An explicit MIME type wins over a data URL header, which wins over the
    sniffed signature. A ZIP signature is refined by the file name.

    Args:
        data: Base64 text or a data URL
        file_name: Optional original file name
        mime_type: Optional explicit MIME type
        field: Option name reported on failure

    Returns:
        Tuple of (clean base64, MIME type)

    Raises:
        ValidationError: If the payload is not valid base64
    """
    declared = mime_type
    match = DATA_URL_PATTERN.match(data.strip())
    if match:
        declared = declared or match.group("mime")
        data = match.group("data")

    cleaned = clean_base64(data, field)
    if declared:
        return cleaned, declared

    sniffed = sniff_mime_type(cleaned)
    by_name = guess_mime_type_from_name(file_name)
    if sniffed == "application/zip" and by_name in ZIP_FAMILY_EXTENSIONS.values():
        return cleaned, by_name
    return cleaned, sniffed or by_name or DEFAULT_FILE_MIME_TYPE


def default_file_name(mime_type: str) -> str:
    extension = mimetypes.guess_extension(mime_type) or ".bin"
    for known_extension, known_type in ZIP_FAMILY_EXTENSIONS.items():
        if known_type == mime_type:
            extension = known_extension
    return f"upload{extension}"


def unescape_json_text(value: str) -> str:
    """Undo the escaping the host form applies to serialized arrays."""
    return value.replace('\\"', '"').replace("\\/", "/").replace("\\\\", "\\")


def parse_string_array(value: Any) -> List[str]:
    """Parse an array option that may arrive as JSON text.

    Text that still does not parse as JSON after unescaping is kept as a
    single-element list.

    Args:
        value: List, JSON text or plain string

    Returns:
        List of strings
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item) != ""]
    if not isinstance(value, str):
        return [str(value)]

    text = value.strip()
    if not text:
        return []
    try:
        parsed = json.loads(unescape_json_text(text))
    except json.JSONDecodeError:
        return [value]

    if isinstance(parsed, list):
        return [str(item) for item in parsed if item is not None and str(item) != ""]
    if isinstance(parsed, str):
        return [parsed] if parsed else []
    return [value]
