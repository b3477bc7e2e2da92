"""
Audit Middleware - one log line per request with timing.

Paths matching a quiet prefix (health checks, static assets) are logged
at DEBUG; everything else is logged at a level picked from the status
code, so upstream failures relayed by /groqlive show up as warnings and
opaque 500s as errors.
"""
import logging
import time
from typing import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ask_gateway.core.logging_config import get_logger

logger = get_logger(__name__)

RESPONSE_TIME_HEADER = "X-Response-Time"


class AuditMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration and client for every request and
    sets the X-Response-Time header.
    """

    def __init__(self, app: ASGIApp, quiet_prefixes: Iterable[str] = ()):
        super().__init__(app)
        self.quiet_prefixes = tuple(quiet_prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        line = f"{request.method} {request.url.path} client={client_ip}"

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"REQUEST FAILED: {line} duration={time.perf_counter() - start_time:.3f}s error={e}")
            raise

        duration = time.perf_counter() - start_time
        logger.log(
            self._level_for(request.url.path, response.status_code),
            f"REQUEST: {line} status={response.status_code} duration={duration:.3f}s",
        )
        response.headers[RESPONSE_TIME_HEADER] = f"{duration:.3f}s"
        return response

    def _level_for(self, path: str, status_code: int) -> int:
        if path.startswith(self.quiet_prefixes):
            return logging.DEBUG
        if status_code >= 500:
            return logging.ERROR
        if status_code >= 400:
            return logging.WARNING
        return logging.INFO
