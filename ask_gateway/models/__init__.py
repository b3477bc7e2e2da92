"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from ask_gateway.models.chat import (
    CompletionRequest,
    CompletionResponse,
    UpstreamErrorResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "CompletionRequest",
    "CompletionResponse",
    "UpstreamErrorResponse",
    "HealthResponse",
    "ErrorResponse",
]
