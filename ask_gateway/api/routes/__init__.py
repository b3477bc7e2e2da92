"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- completion.py : Question answering (/completion, /groqlive)
- greeter.py    : Plain-text greetings (/name)
- health.py     : Health check endpoint
"""
from ask_gateway.api.routes.completion import router as completion_router
from ask_gateway.api.routes.greeter import router as greeter_router
from ask_gateway.api.routes.health import router as health_router

__all__ = [
    "completion_router",
    "greeter_router",
    "health_router",
]
