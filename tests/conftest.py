"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from pathlib import Path

import httpx
import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# The API module reads settings at import time
os.environ.setdefault("OPENROUTER_API_KEY", "test-openrouter-key")
os.environ["APP_ENV"] = "test"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="ask-gateway-logs-")

from ask_gateway.core.config import BackendConfig  # noqa: E402
from ask_gateway.llm.prompts import CHAIN_PROMPT_TEMPLATE  # noqa: E402


def _completion_document(content):
    """Minimal chat-completion payload with one choice."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


@pytest.fixture
def completion_document():
    """Builder for chat-completion payloads: completion_document("text")."""
    return _completion_document


@pytest.fixture
def chain_config():
    return BackendConfig(
        name="openrouter",
        api_key="test-openrouter-key",
        base_url="https://openrouter.ai/api/v1",
        model="meta-llama/llama-3.2-3b-instruct",
        prompt_template=CHAIN_PROMPT_TEMPLATE,
        timeout_seconds=5.0,
    )


@pytest.fixture
def direct_config():
    return BackendConfig(
        name="groq",
        api_key="test-groq-key",
        base_url="https://api.groq.com",
        model="llama-3.3-70b-versatile",
        timeout_seconds=5.0,
    )


@pytest.fixture
def direct_config_without_key(direct_config):
    return BackendConfig(
        name=direct_config.name,
        api_key=None,
        base_url=direct_config.base_url,
        model=direct_config.model,
        timeout_seconds=direct_config.timeout_seconds,
    )


class RecordingUpstream:
    """
    Fake Groq endpoint for httpx.MockTransport.

    Records every request and answers with a fixed response (or raises
    the given exception).
    """

    def __init__(self, status_code=200, json_body=None, text_body=None, error=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text_body = text_body
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def upstream_factory():
    """Build a RecordingUpstream: upstream_factory(status_code=..., json_body=...)."""
    return RecordingUpstream


OPENROUTER_IN_BODY_ERROR = {
    "error": {"message": "Provider secret detail sk-or-123", "code": 429}
}


@pytest.fixture
def openrouter_in_body_error_model(chain_config):
    """
    Real ChatOpenAI whose transport answers 200 with an {"error": ...} body,
    the way OpenRouter reports provider-side failures.
    """
    from langchain_openai import ChatOpenAI

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=OPENROUTER_IN_BODY_ERROR)

    return ChatOpenAI(
        model=chain_config.model,
        api_key=chain_config.api_key,
        base_url=chain_config.base_url,
        max_retries=0,
        http_async_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
