"""
Custom Exceptions - Application-specific error classes.

Two families live here:
- UpstreamError and subclasses: raised by the backend clients and the
  response extractor, never seen by callers directly
- DispatchError and subclasses: raised by the dispatcher, rendered by
  the API layer with their own status code and body

Every class carries a status code and error code so the API layer can
render it without knowing the concrete type.
"""
from typing import Optional


class GatewayException(Exception):
    """
    Base exception for all gateway errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


# ============================================================
# Upstream errors (backend client / extractor layer)
# ============================================================

class UpstreamError(GatewayException):
    """Raised when an upstream LLM call cannot produce a usable result."""
    error_code = "upstream_error"


class MissingCredential(UpstreamError):
    """Raised before any network I/O when a backend has no API key."""
    error_code = "missing_credential"

    def __init__(self, backend: str):
        super().__init__(
            message=f"No API key configured for backend '{backend}'",
            details=f"backend={backend}"
        )
        self.backend = backend


class NetworkFailure(UpstreamError):
    """Raised when the upstream could not be reached or timed out."""
    error_code = "network_failure"


class NonSuccessStatus(UpstreamError):
    """
    Raised when the upstream answered with a non-2xx status.

    The body is kept verbatim so it can be relayed unchanged.
    """
    error_code = "upstream_status"

    def __init__(self, upstream_status: int, body: str):
        super().__init__(
            message=f"Upstream returned HTTP {upstream_status}",
            details=body
        )
        self.upstream_status = upstream_status
        self.body = body


class MalformedResponse(UpstreamError):
    """Raised when an upstream result cannot be interpreted at all."""
    error_code = "malformed_response"


# ============================================================
# Dispatch errors (caller-visible)
# ============================================================

class DispatchError(GatewayException):
    """Base for errors the dispatcher hands to the HTTP layer."""


class InternalDispatchError(DispatchError):
    """Generic 500. Upstream detail is logged, not returned."""
    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str = "The upstream model could not answer this question"):
        super().__init__(message)


class UpstreamPassthroughError(DispatchError):
    """Relays an upstream status code and raw body to the caller."""
    error_code = "upstream_status"

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Upstream returned HTTP {status_code}", details=body)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict:
        """Body shape is {"error": <raw upstream body>}."""
        return {"error": self.body}
