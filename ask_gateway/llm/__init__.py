"""
LLM module - Language model integration.

This module handles all upstream LLM interactions:
- chain_client.py  : prompt template + chat model (OpenRouter)
- direct_client.py : raw chat-completions calls (Groq)
- extractor.py     : answer text from either result shape
- prompts/         : prompt templates
"""
from ask_gateway.llm.chain_client import ChainBackendClient
from ask_gateway.llm.direct_client import DirectBackendClient
from ask_gateway.llm.extractor import (
    PLACEHOLDER_ANSWER,
    extract_chain_answer,
    extract_direct_answer,
)

__all__ = [
    "ChainBackendClient",
    "DirectBackendClient",
    "PLACEHOLDER_ANSWER",
    "extract_chain_answer",
    "extract_direct_answer",
]
