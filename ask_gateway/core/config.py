"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class, and
each upstream provider gets its own immutable BackendConfig derived
from it.

Why environment variables:
1. Security - API keys never committed to Git
2. Flexibility - Different providers/models per deployment
3. Easy override on hosting platforms (Render provides PORT)
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load .env file from project root
# This must happen before accessing os.environ
env_path = PROJECT_ROOT / ".env"
load_dotenv(env_path)


DEFAULT_PORT = 8080
DEFAULT_CHAIN_MODEL = "meta-llama/llama-3.2-3b-instruct"
DEFAULT_DIRECT_MODEL = "llama-3.3-70b-versatile"


@dataclass(frozen=True)
class BackendConfig:
    """
    Process-lifetime configuration for one upstream provider.

    Built once at startup and shared read-only by every request.

    Attributes:
        name: Provider label used in logs and health output
        api_key: Credential sent as a bearer token (None if not configured)
        base_url: Provider API root
        model: Model identifier sent with every request
        prompt_template: Chain backend only - template with a single
            {question} slot
        timeout_seconds: Upper bound for one upstream round trip
    """
    name: str
    api_key: Optional[str]
    base_url: str
    model: str
    prompt_template: Optional[str] = None
    timeout_seconds: float = 60.0

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for daily log files
        host: Interface to bind
        port: Port to bind
        openrouter_api_key: API key for the chain backend (required)
        openrouter_base_url: OpenAI-compatible proxy endpoint
        model: Model identifier for the chain backend
        groq_api_key: API key for the direct backend (optional at startup)
        groq_base_url: Groq API root
        groq_model: Model identifier for the direct backend
        upstream_timeout_seconds: Per-call timeout for both backends
        cors_allow_origins: Origins accepted by the CORS middleware
        static_dir: Directory served at / and /static
        enable_audit_logging: Log every request with timing
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: Path
    host: str
    port: int

    # Chain backend (OpenRouter)
    openrouter_api_key: str
    openrouter_base_url: str
    model: str

    # Direct backend (Groq)
    groq_api_key: Optional[str]
    groq_base_url: str
    groq_model: str

    upstream_timeout_seconds: float

    # HTTP surface
    cors_allow_origins: Tuple[str, ...]
    static_dir: Path
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def chain_backend_config(self) -> BackendConfig:
        """Config for the prompt-chain backend bound to OpenRouter."""
        from ask_gateway.llm.prompts import get_chain_prompt_template

        return BackendConfig(
            name="openrouter",
            api_key=self.openrouter_api_key,
            base_url=self.openrouter_base_url,
            model=self.model,
            prompt_template=get_chain_prompt_template(),
            timeout_seconds=self.upstream_timeout_seconds,
        )

    def direct_backend_config(self) -> BackendConfig:
        """Config for the raw chat-completions backend bound to Groq."""
        return BackendConfig(
            name="groq",
            api_key=self.groq_api_key,
            base_url=self.groq_base_url,
            model=self.groq_model,
            timeout_seconds=self.upstream_timeout_seconds,
        )


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Blank values are treated as unset.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key)
    if value is None or not value.strip():
        value = default
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_optional_env(key: str) -> Optional[str]:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_port(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_PORT


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Why lru_cache:
    - Settings are read once at startup
    - Avoids re-parsing .env on every access
    - maxsize=1 ensures only one instance exists

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If OPENROUTER_API_KEY is missing. The API module calls
            this at import time, so a missing chain credential stops the
            process before it binds a port.
    """
    origins = _get_env("CORS_ALLOW_ORIGINS", "*")

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "AskGateway"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=Path(_get_env("LOG_DIR", str(PROJECT_ROOT / "logs"))),
        host=_get_env("HOST", "0.0.0.0"),
        port=_parse_port(_get_env("PORT", str(DEFAULT_PORT))),

        # Chain backend
        openrouter_api_key=_get_env("OPENROUTER_API_KEY"),
        openrouter_base_url=_get_env("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        model=_get_env("MODEL", DEFAULT_CHAIN_MODEL),

        # Direct backend - a missing key only fails /groqlive calls
        groq_api_key=_get_optional_env("GROQ_API_KEY"),
        groq_base_url=_get_env("GROQ_BASE_URL", "https://api.groq.com"),
        groq_model=_get_env("GROQ_MODEL", DEFAULT_DIRECT_MODEL),

        upstream_timeout_seconds=float(_get_env("UPSTREAM_TIMEOUT_SECONDS", "60")),

        # HTTP surface
        cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        static_dir=Path(_get_env("STATIC_DIR", str(PROJECT_ROOT / "static"))),
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
