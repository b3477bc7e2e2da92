"""
Health Check Routes - System health and monitoring endpoints.

Used by load balancers and hosting platforms to check the process is up.
It does not call any upstream provider.
"""
from datetime import datetime

from fastapi import APIRouter

from ask_gateway import __version__
from ask_gateway.core.config import get_settings
from ask_gateway.core.logging_config import get_logger
from ask_gateway.models.chat import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="""
    Returns 200 OK while the service is running, along with which upstream
    backends have an API key configured. A backend without a key still
    starts; its route fails per request.
    """
)
async def health_check() -> HealthResponse:
    logger.debug("Health check requested")

    settings = get_settings()
    backends = {
        config.name: config.has_credential
        for config in (settings.chain_backend_config(), settings.direct_backend_config())
    }

    return HealthResponse(
        status="healthy",
        version=__version__,
        backends=backends,
        timestamp=datetime.utcnow()
    )
