"""
Ask Gateway - forwards questions to hosted LLMs.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, errors and middleware
- services/  : Request dispatching
- llm/       : Backend clients, answer extraction and prompts
- models/    : Pydantic models for request/response schemas
"""

__version__ = "0.1.0"
