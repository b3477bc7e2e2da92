"""
Prompt for the chain backend.

The gateway keeps no conversation state, so the whole prompt is one
fixed instruction followed by the caller's question.
"""

CHAIN_PROMPT_TEMPLATE = "You are a helpful assistant. Answer concisely:\n{question}"

# Name of the only variable the template may reference
QUESTION_VARIABLE = "question"


def get_chain_prompt_template() -> str:
    """Get the template rendered for every /completion request."""
    return CHAIN_PROMPT_TEMPLATE
