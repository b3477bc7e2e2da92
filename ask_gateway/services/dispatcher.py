"""
Request Dispatcher - routes a question to a backend and normalizes the result.

Each dispatch is a single linear pipeline:
1. Call the upstream backend
2. Extract the answer text
3. Return CompletionResponse, or raise a DispatchError

No retries, and nothing is remembered between calls. The dispatcher
only holds the two backend clients, which are read-only after startup.

Error mapping differs per route:
- Chain route: every upstream failure becomes a generic 500
- Direct route: an upstream non-2xx status is relayed with its body;
  everything else becomes a generic 500
"""
from functools import lru_cache
from typing import Optional

from ask_gateway.core.config import Settings, get_settings
from ask_gateway.core.exceptions import (
    InternalDispatchError,
    NonSuccessStatus,
    UpstreamError,
    UpstreamPassthroughError,
)
from ask_gateway.core.logging_config import get_logger
from ask_gateway.llm.chain_client import ChainBackendClient
from ask_gateway.llm.direct_client import DirectBackendClient
from ask_gateway.llm.extractor import extract_chain_answer, extract_direct_answer
from ask_gateway.models.chat import CompletionResponse

logger = get_logger(__name__)


class RequestDispatcher:
    """
    Dispatches questions to the chain and direct backends.

    Example:
        >>> dispatcher = RequestDispatcher(chain_backend, direct_backend)
        >>> result = await dispatcher.dispatch_direct("Why is the sky blue?")
        >>> result.answer
        'Rayleigh scattering...'
    """

    def __init__(self, chain_backend: ChainBackendClient, direct_backend: DirectBackendClient):
        self.chain_backend = chain_backend
        self.direct_backend = direct_backend

    async def dispatch_chain(self, question: str) -> CompletionResponse:
        """
        Answer a question through the chain backend.

        Raises:
            InternalDispatchError: On any upstream or extraction failure
        """
        logger.info(f"Chain dispatch: question_length={len(question)}")

        try:
            result = await self.chain_backend.ask(question)
            answer = await extract_chain_answer(result)
        except UpstreamError as e:
            logger.error(f"Chain backend failed: {e.error_code}: {e.message} ({e.details})")
            raise InternalDispatchError() from e

        return CompletionResponse(answer=answer)

    async def dispatch_direct(self, question: str) -> CompletionResponse:
        """
        Answer a question through the direct backend.

        Raises:
            UpstreamPassthroughError: Upstream answered non-2xx; carries its
                status code and raw body
            InternalDispatchError: Missing credential, network failure or
                undecodable body
        """
        logger.info(f"Direct dispatch: question_length={len(question)}")

        try:
            document = await self.direct_backend.ask(question)
        except NonSuccessStatus as e:
            logger.warning(f"Relaying upstream HTTP {e.upstream_status} to caller")
            raise UpstreamPassthroughError(e.upstream_status, e.body) from e
        except UpstreamError as e:
            logger.error(f"Direct backend failed: {e.error_code}: {e.message}")
            raise InternalDispatchError() from e

        return CompletionResponse(answer=extract_direct_answer(document))

    async def aclose(self) -> None:
        """Release upstream connections."""
        await self.direct_backend.aclose()


def build_dispatcher(settings: Optional[Settings] = None) -> RequestDispatcher:
    """
    Construct a dispatcher from settings.

    Args:
        settings: Settings to use. Defaults to get_settings().
    """
    settings = settings or get_settings()
    return RequestDispatcher(
        chain_backend=ChainBackendClient(settings.chain_backend_config()),
        direct_backend=DirectBackendClient(settings.direct_backend_config()),
    )


@lru_cache(maxsize=1)
def get_dispatcher() -> RequestDispatcher:
    """Get the process-wide dispatcher (FastAPI dependency)."""
    return build_dispatcher()
