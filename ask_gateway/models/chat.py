"""
Request and Response models for the question endpoints.

These Pydantic models define the contract between client and server.
They provide:
- Type validation
- Automatic documentation
- Request/response serialization
"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class CompletionRequest(BaseModel):
    """
    Request model for /completion and /groqlive.

    Attributes:
        question: The caller's natural language question. No upper bound;
            the upstream provider decides what is too long.
    """
    question: str = Field(
        ...,
        min_length=1,
        description="The question to forward to the model",
        examples=["What is the capital of France?"]
    )


class CompletionResponse(BaseModel):
    """Response model for /completion and /groqlive."""
    answer: str = Field(
        ...,
        min_length=1,
        description="The model's answer, or 'No answer received' if it returned no text"
    )


class UpstreamErrorResponse(BaseModel):
    """Body relayed when the direct backend's provider rejects a request."""
    error: str = Field(..., description="Raw upstream response body")


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="healthy")
    version: str
    backends: Dict[str, bool] = Field(
        default_factory=dict,
        description="Backend name -> whether an API key is configured"
    )
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
