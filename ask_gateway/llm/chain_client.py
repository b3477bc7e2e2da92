"""
Chain backend client for OpenRouter (OpenAI-compatible proxy).

The backend is a one-step chain: a prompt template rendered with the
question, piped into a chat model. LangChain's ChatOpenAI talks to any
OpenAI-compatible endpoint, so pointing its base URL at OpenRouter is
all the provider wiring needed.

The result handed back is the model's message object; turning it into
text is the extractor's job.
"""
from typing import Optional

from langchain_core.messages import BaseMessage
from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from openai import APIConnectionError, APIError, APIStatusError

from ask_gateway.core.config import BackendConfig
from ask_gateway.core.exceptions import (
    MalformedResponse,
    MissingCredential,
    NetworkFailure,
    NonSuccessStatus,
)
from ask_gateway.core.logging_config import get_logger
from ask_gateway.llm.prompts import QUESTION_VARIABLE

logger = get_logger(__name__)


class ChainBackendClient:
    """
    Prompt-template + chat-model chain bound to one provider.

    The chain is built once and shared by all requests. Runnables hold
    no per-call state, so concurrent ainvoke calls are safe.

    Example:
        >>> client = ChainBackendClient(settings.chain_backend_config())
        >>> message = await client.ask("What is the capital of France?")
    """

    def __init__(self, config: BackendConfig, chat_model: Optional[Runnable] = None):
        """
        Build the chain.

        Args:
            config: Chain backend configuration (template required)
            chat_model: Runnable to use instead of ChatOpenAI (tests inject
                fake chat models here)

        Raises:
            ValueError: If the template does not have exactly one
                {question} slot
            MissingCredential: If no chat model is injected and the config
                has no API key
        """
        self.config = config
        self.prompt = self._build_prompt(config.prompt_template)

        if chat_model is None:
            if not config.has_credential:
                raise MissingCredential(config.name)
            chat_model = ChatOpenAI(
                model=config.model,
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout_seconds,
                max_retries=0,
            )

        self.chat_model = chat_model
        self.chain = self.prompt | self.chat_model

        logger.info(f"Chain backend ready: provider={config.name}, model={config.model}")

    @staticmethod
    def _build_prompt(template: Optional[str]) -> PromptTemplate:
        if not template:
            raise ValueError("Chain backend requires a prompt template")

        prompt = PromptTemplate.from_template(template)
        if prompt.input_variables != [QUESTION_VARIABLE]:
            raise ValueError(
                f"Prompt template must contain exactly one '{{{QUESTION_VARIABLE}}}' slot, "
                f"found {prompt.input_variables}"
            )
        return prompt

    async def ask(self, question: str) -> BaseMessage:
        """
        Run the chain for one question.

        Args:
            question: Caller's question, passed through unchanged

        Returns:
            The chat model's output message (opaque to callers)

        Raises:
            NonSuccessStatus: Provider answered with an error status
            NetworkFailure: Provider unreachable or timed out
            MalformedResponse: Provider reported an error inside a 2xx
                body, or the SDK could not read the response
        """
        try:
            return await self.chain.ainvoke({QUESTION_VARIABLE: question})
        except APIStatusError as e:
            logger.warning(f"{self.config.name} returned HTTP {e.status_code}")
            raise NonSuccessStatus(e.status_code, e.response.text) from e
        except APIConnectionError as e:
            logger.warning(f"{self.config.name} unreachable: {e}")
            raise NetworkFailure(f"Could not reach {self.config.name}: {e}") from e
        except APIError as e:
            logger.warning(f"{self.config.name} SDK error: {e}")
            raise MalformedResponse(f"{self.config.name} returned an unusable response", details=str(e)) from e
        except ValueError as e:
            # OpenRouter reports provider failures as 200 {"error": {...}}
            logger.warning(f"{self.config.name} reported an error in its response body: {e}")
            raise MalformedResponse(f"{self.config.name} reported an error", details=str(e)) from e
