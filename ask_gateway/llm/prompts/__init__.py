"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files so prompt changes show up
clearly in version control.
"""
from ask_gateway.llm.prompts.assistant_prompts import (
    CHAIN_PROMPT_TEMPLATE,
    QUESTION_VARIABLE,
    get_chain_prompt_template,
)

__all__ = [
    "CHAIN_PROMPT_TEMPLATE",
    "QUESTION_VARIABLE",
    "get_chain_prompt_template",
]
