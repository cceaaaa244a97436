"""OpenAI client construction."""
from typing import Any, Callable

from openai import AsyncOpenAI

from core.logger import LoggerService
from core.settings import Settings

# Takes the API key, returns an AsyncOpenAI-compatible client
ClientFactory = Callable[[str], Any]


class OpenAIClientFactory:
    """Builds one client per invocation.

    The SDK's own retry loop is disabled: a failed upstream call yields a
    single failure result.
    """

    def __init__(self, settings: Settings, logger: LoggerService) -> None:
        """Initialize client factory.

        Args:
            settings: Settings instance
            logger: Logger service instance
        """
        self.settings = settings
        self.logger = logger.get_logger(__name__)

    def __call__(self, api_key: str) -> AsyncOpenAI:
        self.logger.debug(
            "Creating OpenAI client",
            extra={"base_url": self.settings.OPENAI_BASE_URL},
        )
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.settings.OPENAI_BASE_URL or None,
            max_retries=0,
        )
