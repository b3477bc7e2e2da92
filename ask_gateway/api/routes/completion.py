"""
Completion Routes - question answering endpoints.

- POST /completion : chain backend (OpenRouter)
- POST /groqlive   : direct backend (Groq)

Routes stay thin: the dispatcher does the work, and DispatchErrors are
rendered by the exception handlers registered in api/main.py.
"""
from fastapi import APIRouter, Depends

from ask_gateway.core.logging_config import get_logger
from ask_gateway.models.chat import (
    CompletionRequest,
    CompletionResponse,
    ErrorResponse,
    UpstreamErrorResponse,
)
from ask_gateway.services.dispatcher import RequestDispatcher, get_dispatcher

logger = get_logger(__name__)

router = APIRouter(
    tags=["Completion"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)


@router.post(
    "/completion",
    response_model=CompletionResponse,
    summary="Ask the chain backend",
    description="""
    Forward a question to the OpenRouter-hosted model through a fixed
    system prompt ("You are a helpful assistant. Answer concisely").

    Any upstream failure is returned as a 500; upstream details are logged
    only.
    """
)
async def completion(
    request: CompletionRequest,
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
) -> CompletionResponse:
    return await dispatcher.dispatch_chain(request.question)


@router.post(
    "/groqlive",
    response_model=CompletionResponse,
    summary="Ask the direct backend",
    description="""
    Forward a question to Groq's chat-completions API as a single user
    message.

    If Groq rejects the request, its status code is returned unchanged with
    body `{"error": "<raw Groq response body>"}`. Other failures (including
    a missing GROQ_API_KEY) are returned as a 500.
    """,
    responses={
        "4XX": {"model": UpstreamErrorResponse, "description": "Upstream rejected the request"},
    }
)
async def groqlive(
    request: CompletionRequest,
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
) -> CompletionResponse:
    return await dispatcher.dispatch_direct(request.question)
