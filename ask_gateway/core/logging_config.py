"""
Logging setup for the gateway.

Console output follows LOG_LEVEL. The daily file under LOG_DIR always
keeps DEBUG, since callers only ever see an opaque 500 for chain
backend failures and the upstream detail lives in the log.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ask_gateway.core.config import Settings


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# SDK and transport loggers that log every upstream request at DEBUG
CHATTY_LOGGERS = ("httpx", "httpcore", "openai", "groq", "langchain")

# Handlers added by the last setup_logging call
_installed_handlers: List[logging.Handler] = []


def log_file_path(settings: Settings, day: Optional[datetime] = None) -> Path:
    """Daily log file, named after the app: askgateway_20240115.log"""
    day = day or datetime.now()
    slug = settings.app_name.lower().replace(" ", "_")
    return settings.log_dir / f"{slug}_{day.strftime('%Y%m%d')}.log"


def setup_logging(settings: Settings) -> Path:
    """
    Install console and file handlers on the root logger.

    Calling it again replaces the handlers from the previous call
    instead of stacking new ones.

    Args:
        settings: Supplies log_level, log_dir and app_name

    Returns:
        Path of the log file being written
    """
    root_logger = logging.getLogger()

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_file_path(settings)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    root_logger.setLevel(logging.DEBUG)
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug(
        f"Logging configured for {settings.app_name} ({settings.app_env}): "
        f"console={settings.log_level}, file={log_file}"
    )
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with __name__."""
    return logging.getLogger(name)
