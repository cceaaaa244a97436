from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app import OperationsApp
from options import OPTION_FIELDS


@pytest.fixture
def make_client(logger_service, settings, dispatcher):
    def build() -> TestClient:
        app = OperationsApp()
        app.state.logger = logger_service
        app.state.settings = settings
        app.state.dispatcher = dispatcher
        app.configure()
        return TestClient(app)

    return build


def test_health(make_client) -> None:
    response = make_client().get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(make_client) -> None:
    response = make_client().get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


def test_execute_success(make_client) -> None:
    response = make_client().post(
        "/v1/operations", json={"api_key": "sk-test", "user_message": "hi"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["response_id"] == "resp_123"
    assert body["data"]["content"] == "Hello there"


def test_execute_failure_is_still_http_200(make_client) -> None:
    response = make_client().post(
        "/v1/operations", json={"operation_type": "embeddings", "api_key": "sk-test"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": {
            "message": "Text is required for embeddings",
            "type": "ConfigurationError",
            "operation_type": "embeddings",
            "model": "gpt-4o-mini",
        },
    }


def test_execute_rejects_non_object_body(make_client) -> None:
    response = make_client().post("/v1/operations", json=["not", "an", "object"])

    assert response.status_code == 422
    assert response.json()["error"]["code"] == 422


def test_option_endpoints(make_client) -> None:
    client = make_client()

    options = client.get("/v1/operations/options").json()["options"]
    assert len(options) == len(OPTION_FIELDS)

    fields = client.post(
        "/v1/operations/options/visible", json={"operation_type": "moderation"}
    ).json()["fields"]
    assert "text_input" in fields
    assert "model" not in fields

    rows = client.post(
        "/v1/operations/overview",
        json={"operation_type": "moderation", "text_input": "hello"},
    ).json()["overview"]
    assert rows[0] == {"label": "Operation", "text": "Content Moderation"}
    assert rows[2] == {"label": "Input", "text": "hello"}


def test_service_auth(make_client, settings) -> None:
    settings.ENABLE_SERVICE_AUTH = True
    settings.SERVICE_API_KEY = "service-secret"
    client = make_client()

    denied = client.post("/v1/operations", json={"user_message": "hi"})
    assert denied.status_code == 401
    assert denied.json()["error"]["message"] == "Authentication required"

    wrong = client.post(
        "/v1/operations",
        json={"user_message": "hi"},
        headers={"Authorization": "Bearer nope"},
    )
    assert wrong.status_code == 401
    assert wrong.json()["error"]["message"] == "Invalid service API key"

    allowed = client.post(
        "/v1/operations",
        json={"api_key": "sk-test", "user_message": "hi"},
        headers={"Authorization": "Bearer service-secret"},
    )
    assert allowed.status_code == 200
    assert allowed.json()["success"] is True

    assert client.get("/health").status_code == 200


def test_service_auth_rejects_non_ascii_key(make_client, settings) -> None:
    settings.ENABLE_SERVICE_AUTH = True
    settings.SERVICE_API_KEY = "service-secret"
    client = make_client()

    response = client.post(
        "/v1/operations",
        json={"user_message": "hi"},
        headers={"Authorization": "Bearer pässword".encode("latin-1")},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid service API key"


def test_configure_requires_dependencies() -> None:
    with pytest.raises(RuntimeError):
        OperationsApp().configure()
