"""Shared fixtures: settings, a recording OpenAI stub and a dispatcher."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest

from core.logger import LoggerService
from core.settings import Settings
from operations.dispatcher import OperationDispatcher
from operations.factory import HandlerFactory


class FakeEndpoint:
    """Records every call made on one SDK resource."""

    def __init__(self, client: "FakeOpenAI", path: str) -> None:
        self.client = client
        self.path = path

    async def _record(self, method: str, args: tuple, kwargs: dict) -> Any:
        key = f"{self.path}.{method}"
        self.client.calls.append((key, args, kwargs))
        result = self.client.results.get(key)
        if isinstance(result, BaseException):
            raise result
        return result

    async def create(self, *args: Any, **kwargs: Any) -> Any:
        return await self._record("create", args, kwargs)

    async def generate(self, *args: Any, **kwargs: Any) -> Any:
        return await self._record("generate", args, kwargs)

    async def list(self, *args: Any, **kwargs: Any) -> Any:
        return await self._record("list", args, kwargs)

    async def delete(self, *args: Any, **kwargs: Any) -> Any:
        return await self._record("delete", args, kwargs)


class FakeOpenAI:
    """Stand-in for ``AsyncOpenAI`` returning canned results by endpoint."""

    def __init__(self, results: Optional[Dict[str, Any]] = None) -> None:
        self.results: Dict[str, Any] = dict(results or {})
        self.calls: List[Tuple[str, tuple, dict]] = []
        self.closed = False
        self.responses = FakeEndpoint(self, "responses")
        self.embeddings = FakeEndpoint(self, "embeddings")
        self.moderations = FakeEndpoint(self, "moderations")
        self.models = FakeEndpoint(self, "models")
        self.files = FakeEndpoint(self, "files")
        self.completions = FakeEndpoint(self, "completions")
        self.images = FakeEndpoint(self, "images")
        self.chat = SimpleNamespace(completions=FakeEndpoint(self, "chat.completions"))
        self.audio = SimpleNamespace(
            transcriptions=FakeEndpoint(self, "audio.transcriptions"),
            translations=FakeEndpoint(self, "audio.translations"),
        )

    async def close(self) -> None:
        self.closed = True

    def kwargs_of(self, key: str) -> List[dict]:
        return [kwargs for called, _, kwargs in self.calls if called == key]

    def args_of(self, key: str) -> List[tuple]:
        return [args for called, args, _ in self.calls if called == key]


class FakeClientFactory:
    def __init__(self, client: FakeOpenAI) -> None:
        self.client = client
        self.api_keys: List[str] = []

    def __call__(self, api_key: str) -> FakeOpenAI:
        self.api_keys.append(api_key)
        return self.client


class FakeStorage:
    def __init__(self) -> None:
        self.fetched: List[str] = []

    async def fetch(self, file_id: str) -> Tuple[str, bytes]:
        self.fetched.append(file_id)
        return "speech.mp3", b"ID3-audio-bytes"


def response_payload(**overrides: Any) -> Dict[str, Any]:
    """A Responses API result as a plain mapping."""
    payload = {
        "id": "resp_123",
        "model": "gpt-4o-mini",
        "status": "completed",
        "output_text": "Hello there",
        "output": [],
        "usage": {"input_tokens": 10, "output_tokens": 5, "total_tokens": 15},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="",
        OPENAI_BASE_URL=None,
        ASSET_STORAGE_URL="",
        LOG_FORMAT="text",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def logger_service(settings: Settings) -> LoggerService:
    return LoggerService(settings)


@pytest.fixture
def openai_client() -> FakeOpenAI:
    return FakeOpenAI({"responses.create": response_payload()})


@pytest.fixture
def client_factory(openai_client: FakeOpenAI) -> FakeClientFactory:
    return FakeClientFactory(openai_client)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def handler_factory(
    settings: Settings, logger_service: LoggerService, storage: FakeStorage
) -> HandlerFactory:
    return HandlerFactory(settings=settings, logger=logger_service, storage=storage)


@pytest.fixture
def dispatcher(
    settings: Settings,
    logger_service: LoggerService,
    handler_factory: HandlerFactory,
    client_factory: FakeClientFactory,
) -> OperationDispatcher:
    return OperationDispatcher(
        settings=settings,
        logger=logger_service,
        handler_factory=handler_factory,
        client_factory=client_factory,
    )
