"""Operation handlers package."""

from .base import OperationHandler, ResponsesHandler
from .code import CodeInterpreterHandler
from .embeddings import EmbeddingsHandler, ListModelsHandler, ModerationHandler
from .files import (
    FileAnalysisHandler,
    FileAnalysisWithVectorSearchHandler,
    FileSearchHandler,
    FileSearchWithImageHandler,
)
from .image import ImageAnalysisHandler, ImageGenerationHandler
from .legacy import (
    AudioTranscriptionHandler,
    AudioTranslationHandler,
    ChatCompletionHandler,
    CompletionHandler,
)
from .text import TextGenerationHandler

__all__ = [
    "AudioTranscriptionHandler",
    "AudioTranslationHandler",
    "ChatCompletionHandler",
    "CodeInterpreterHandler",
    "CompletionHandler",
    "EmbeddingsHandler",
    "FileAnalysisHandler",
    "FileAnalysisWithVectorSearchHandler",
    "FileSearchHandler",
    "FileSearchWithImageHandler",
    "ImageAnalysisHandler",
    "ImageGenerationHandler",
    "ListModelsHandler",
    "ModerationHandler",
    "OperationHandler",
    "ResponsesHandler",
    "TextGenerationHandler",
]
