"""
Direct backend client for the Groq chat-completions API.

Unlike the chain backend, this path works on the raw HTTP exchange:
- The request body is a single user message and the configured model
- A non-2xx response is captured with its body text untouched
- A 2xx response is returned as the decoded JSON document, with no
  schema validation, so malformed payloads can degrade gracefully
  downstream

The Groq SDK is used in raw-response mode: it handles auth headers and
connection pooling, while parsing stays in our hands.
"""
from typing import Any, Optional

import httpx
from groq import AsyncGroq, APIConnectionError, APIStatusError

from ask_gateway.core.config import BackendConfig
from ask_gateway.core.exceptions import (
    MalformedResponse,
    MissingCredential,
    NetworkFailure,
    NonSuccessStatus,
)
from ask_gateway.core.logging_config import get_logger

logger = get_logger(__name__)


class DirectBackendClient:
    """
    Raw chat-completions client bound to one provider.

    The SDK client is created on first use so that a missing API key
    never blocks startup; it only fails the requests that need it.
    """

    def __init__(self, config: BackendConfig, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            config: Direct backend configuration
            http_client: Optional httpx client for the SDK to send through
                (tests inject one backed by httpx.MockTransport)
        """
        self.config = config
        self._http_client = http_client
        self._client: Optional[AsyncGroq] = None

    def _get_client(self) -> AsyncGroq:
        if self._client is None:
            self._client = AsyncGroq(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
                max_retries=0,
                http_client=self._http_client,
            )
            logger.info(
                f"Direct backend client created: provider={self.config.name}, "
                f"model={self.config.model}"
            )
        return self._client

    def build_request_body(self, question: str) -> dict:
        """Chat-completion body: one user message, fixed model."""
        return {
            "model": self.config.model,
            "messages": [{"role": "user", "content": question}],
        }

    async def ask(self, question: str) -> Any:
        """
        Send one question and return the decoded JSON response.

        Args:
            question: Caller's question, passed through unchanged

        Returns:
            Decoded JSON document (any JSON type)

        Raises:
            MissingCredential: No API key configured (checked before I/O)
            NonSuccessStatus: Non-2xx response, body kept verbatim
            NetworkFailure: Transport error or timeout
            MalformedResponse: 2xx response whose body is not JSON
        """
        if not self.config.has_credential:
            logger.error(f"{self.config.name} API key is not configured")
            raise MissingCredential(self.config.name)

        body = self.build_request_body(question)

        try:
            raw = await self._get_client().chat.completions.with_raw_response.create(**body)
        except APIStatusError as e:
            logger.warning(f"{self.config.name} returned HTTP {e.status_code}")
            raise NonSuccessStatus(e.status_code, e.response.text) from e
        except APIConnectionError as e:
            logger.warning(f"{self.config.name} unreachable: {e}")
            raise NetworkFailure(f"Could not reach {self.config.name}: {e}") from e

        try:
            return raw.http_response.json()
        except ValueError as e:
            raise MalformedResponse(
                f"{self.config.name} returned a non-JSON body",
                details=raw.http_response.text[:200]
            ) from e

    async def aclose(self) -> None:
        """Release pooled connections."""
        if self._client is not None:
            await self._client.close()
            self._client = None
