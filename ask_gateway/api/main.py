"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Settings and logging initialization (fails fast without OPENROUTER_API_KEY)
2. Middleware configuration (audit logging, CORS)
3. Exception handlers
4. Router registration and static file serving

Run with: uvicorn ask_gateway.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ask_gateway import __version__
from ask_gateway.core.config import get_settings
from ask_gateway.core.logging_config import setup_logging, get_logger
from ask_gateway.core.exceptions import GatewayException
from ask_gateway.core.audit import AuditMiddleware
from ask_gateway.api.routes import completion_router, greeter_router, health_router
from ask_gateway.services.dispatcher import get_dispatcher


# Raises ValueError when the chain backend credential is missing,
# so the process never starts without it
settings = get_settings()
setup_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: build the dispatcher so backend wiring errors surface now
    - Shutdown: close upstream connection pools
    """
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Chain backend: {settings.openrouter_base_url} model={settings.model}")
    logger.info(f"Direct backend: {settings.groq_base_url} model={settings.groq_model}")
    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY is not set; /groqlive will return 500")

    dispatcher = get_dispatcher()

    yield

    logger.info(f"Shutting down {settings.app_name}")
    await dispatcher.aclose()


app = FastAPI(
    title="Ask Gateway API",
    description="""
    Forwards natural-language questions to hosted LLMs and returns a plain
    text answer.

    ## Endpoints

    - **POST /completion**: OpenRouter, through a fixed system prompt
    - **POST /groqlive**: Groq chat completions, upstream errors relayed
    - **GET /name/{name}**: greeting
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration
# ============================================================

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware, quiet_prefixes=("/health", "/static"))
    logger.info("Audit logging middleware enabled")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(GatewayException)
async def gateway_exception_handler(request: Request, exc: GatewayException):
    """Render dispatch errors with their own status code and body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.is_development() else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(completion_router)
app.include_router(greeter_router)


# ============================================================
# Static Files (registered last so API routes take precedence)
# ============================================================

if settings.static_dir.is_dir():
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="site")
    logger.info(f"Serving static files from {settings.static_dir}")
else:
    logger.warning(f"Static directory {settings.static_dir} not found; static serving disabled")


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    logger.info("POST endpoints: /completion, /groqlive")

    uvicorn.run(
        "ask_gateway.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development()
    )
