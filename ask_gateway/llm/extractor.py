"""
Response extraction - turns raw upstream results into answer text.

The two backends fail differently on purpose:
- Chain results are resolved through an output parser. If resolution
  fails the request fails (MalformedResponse).
- Direct results are generic JSON. Navigation never fails; any missing
  or mistyped step yields the placeholder answer.
"""
from typing import Any, Optional

from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import StrOutputParser

from ask_gateway.core.exceptions import MalformedResponse
from ask_gateway.core.logging_config import get_logger

logger = get_logger(__name__)

PLACEHOLDER_ANSWER = "No answer received"

_output_parser = StrOutputParser()


async def extract_chain_answer(result: Any) -> str:
    """
    Get the primary text output of a chain result.

    Args:
        result: Whatever the chain returned (normally an AIMessage)

    Returns:
        The message text, or the placeholder if the text is empty

    Raises:
        MalformedResponse: If the result is not a chat message or the
            parser cannot resolve it to text
    """
    if not isinstance(result, BaseMessage):
        raise MalformedResponse(
            "Chain returned an unexpected result",
            details=type(result).__name__
        )

    try:
        text = await _output_parser.ainvoke(result)
    except (ValueError, TypeError) as e:
        raise MalformedResponse("Could not resolve chain output", details=str(e)) from e

    if not isinstance(text, str):
        raise MalformedResponse("Chain output is not text", details=type(text).__name__)

    if not text:
        logger.warning("Chain produced no text output, using placeholder")
        return PLACEHOLDER_ANSWER
    return text


def _get_key(node: Any, key: str) -> Optional[Any]:
    return node.get(key) if isinstance(node, dict) else None


def _get_first(node: Any) -> Optional[Any]:
    return node[0] if isinstance(node, list) and node else None


def extract_direct_answer(document: Any) -> str:
    """
    Read choices[0].message.content from a chat-completion document.

    Every step is optional; a missing key, wrong type, empty list or
    empty string anywhere gives the placeholder instead of an error.
    """
    choices = _get_key(document, "choices")
    message = _get_key(_get_first(choices), "message")
    content = _get_key(message, "content")

    if isinstance(content, str) and content:
        return content

    logger.warning("Direct backend response had no usable content, using placeholder")
    return PLACEHOLDER_ANSWER
