"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- Orchestrate between the backend clients and the extractor
"""
from ask_gateway.services.dispatcher import RequestDispatcher, build_dispatcher, get_dispatcher

__all__ = [
    "RequestDispatcher",
    "build_dispatcher",
    "get_dispatcher",
]
