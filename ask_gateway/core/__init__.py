"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Upstream and dispatch error types
- audit.py          : Request logging middleware
"""
from ask_gateway.core.config import get_settings, Settings, BackendConfig
from ask_gateway.core.logging_config import setup_logging, get_logger

__all__ = [
    "get_settings",
    "Settings",
    "BackendConfig",
    "setup_logging",
    "get_logger",
]
