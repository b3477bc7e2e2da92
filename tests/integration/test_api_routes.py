"""
HTTP surface tests.

The dispatcher dependency is overridden with one wired to fake
upstreams, then the routes are exercised through FastAPI's TestClient.

Verifies:
✔ /completion and /groqlive return {"answer": ...}
✔ /groqlive relays upstream status and raw body as {"error": ...}
✔ Other failures are 500
✔ Request validation, greeter, health and static routes
"""

import logging
from dataclasses import replace

import httpx
import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda

import ask_gateway.api.main as main_module
from ask_gateway.api.main import app
from ask_gateway.llm.chain_client import ChainBackendClient
from ask_gateway.llm.direct_client import DirectBackendClient
from ask_gateway.llm.extractor import PLACEHOLDER_ANSWER
from ask_gateway.services.dispatcher import RequestDispatcher, get_dispatcher


@pytest.fixture
def client_with(chain_config, direct_config):
    """client_with(chat_model=..., upstream=..., direct=...) -> TestClient"""

    def factory(chat_model=None, upstream=None, direct=None):
        dispatcher = RequestDispatcher(
            chain_backend=ChainBackendClient(
                chain_config,
                chat_model=chat_model or FakeListChatModel(responses=["Y"]),
            ),
            direct_backend=DirectBackendClient(
                direct or direct_config,
                http_client=upstream.http_client() if upstream else None,
            ),
        )
        app.dependency_overrides[get_dispatcher] = lambda: dispatcher
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


class TestCompletionRoute:
    def test_success(self, client_with):
        client = client_with(chat_model=FakeListChatModel(responses=["Y"]))

        response = client.post("/completion", json={"question": "Why?"})

        assert response.status_code == 200
        assert response.json() == {"answer": "Y"}

    def test_extraction_failure_is_500(self, client_with):
        client = client_with(chat_model=RunnableLambda(lambda _: {"not": "a message"}))

        response = client.post("/completion", json={"question": "Why?"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"

    def test_provider_error_in_body_is_opaque_500(
        self, client_with, openrouter_in_body_error_model, monkeypatch
    ):
        # Development mode is where unhandled errors expose their details
        monkeypatch.setattr(main_module, "settings", replace(main_module.settings, app_env="development"))
        client = client_with(chat_model=openrouter_in_body_error_model)

        response = client.post("/completion", json={"question": "Why?"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"
        assert "sk-or-123" not in response.text
        assert "Provider secret detail" not in response.text

    def test_empty_question_is_rejected(self, client_with):
        client = client_with()

        response = client.post("/completion", json={"question": ""})

        assert response.status_code == 422

    def test_missing_question_is_rejected(self, client_with):
        client = client_with()

        response = client.post("/completion", json={})

        assert response.status_code == 422


class TestGroqliveRoute:
    def test_success(self, client_with, upstream_factory, completion_document):
        client = client_with(upstream=upstream_factory(json_body=completion_document("X")))

        response = client.post("/groqlive", json={"question": "Why?"})

        assert response.status_code == 200
        assert response.json() == {"answer": "X"}

    def test_malformed_success_gives_placeholder(self, client_with, upstream_factory):
        client = client_with(upstream=upstream_factory(json_body={"choices": []}))

        response = client.post("/groqlive", json={"question": "Why?"})

        assert response.status_code == 200
        assert response.json() == {"answer": PLACEHOLDER_ANSWER}

    def test_rate_limit_is_passed_through(self, client_with, upstream_factory):
        upstream = upstream_factory(status_code=429, text_body='{"error":"rate limited"}')
        client = client_with(upstream=upstream)

        response = client.post("/groqlive", json={"question": "Why?"})

        assert response.status_code == 429
        assert response.json() == {"error": '{"error":"rate limited"}'}

    def test_client_error_is_passed_through(self, client_with, upstream_factory):
        upstream = upstream_factory(status_code=400, text_body="context length exceeded")
        client = client_with(upstream=upstream)

        response = client.post("/groqlive", json={"question": "x" * 100_000})

        assert response.status_code == 400
        assert response.json() == {"error": "context length exceeded"}

    @pytest.mark.parametrize("question", ["hi", "a much longer question about anything"])
    def test_missing_key_is_500(self, client_with, upstream_factory, direct_config_without_key, question):
        upstream = upstream_factory(json_body={})
        client = client_with(upstream=upstream, direct=direct_config_without_key)

        response = client.post("/groqlive", json={"question": question})

        assert response.status_code == 500
        assert upstream.requests == []

    def test_network_failure_is_500(self, client_with, upstream_factory):
        upstream = upstream_factory(error=httpx.ConnectError("connection refused"))
        client = client_with(upstream=upstream)

        response = client.post("/groqlive", json={"question": "Why?"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"


class TestAmbientRoutes:
    def test_greeter_with_name(self, client_with):
        response = client_with().get("/name/Ada")

        assert response.status_code == 200
        assert response.text == "Hello, Ada!"
        assert response.headers["content-type"].startswith("text/plain")

    def test_greeter_default(self, client_with):
        response = client_with().get("/name")

        assert response.status_code == 200
        assert response.text == "Hello, world!"

    def test_health(self, client_with):
        response = client_with().get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["backends"]["openrouter"] is True
        assert "groq" in body["backends"]

    def test_index_page_is_served(self, client_with):
        response = client_with().get("/")

        assert response.status_code == 200
        assert "Ask Gateway" in response.text

    def test_response_time_header(self, client_with):
        response = client_with().get("/name")

        assert "x-response-time" in response.headers


class TestAuditLevels:
    AUDIT_LOGGER = "ask_gateway.core.audit"

    def _audit_records(self, caplog):
        return [r for r in caplog.records if r.name == self.AUDIT_LOGGER]

    def test_health_is_logged_at_debug(self, client_with, caplog):
        client = client_with()

        with caplog.at_level(logging.DEBUG, logger=self.AUDIT_LOGGER):
            client.get("/health")

        [record] = self._audit_records(caplog)
        assert record.levelno == logging.DEBUG
        assert "/health" in record.getMessage()

    def test_api_call_is_logged_at_info(self, client_with, caplog):
        client = client_with()

        with caplog.at_level(logging.DEBUG, logger=self.AUDIT_LOGGER):
            client.get("/name/Ada")

        [record] = self._audit_records(caplog)
        assert record.levelno == logging.INFO
        assert "status=200" in record.getMessage()

    def test_relayed_upstream_error_is_logged_at_warning(self, client_with, upstream_factory, caplog):
        client = client_with(upstream=upstream_factory(status_code=429, text_body="slow down"))

        with caplog.at_level(logging.DEBUG, logger=self.AUDIT_LOGGER):
            client.post("/groqlive", json={"question": "Why?"})

        [record] = self._audit_records(caplog)
        assert record.levelno == logging.WARNING
        assert "status=429" in record.getMessage()
