"""Greeting routes - plain-text smoke test endpoints."""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(
    prefix="/name",
    tags=["Greeter"],
)


@router.get("/{name}", response_class=PlainTextResponse)
async def greeter_with_name(name: str) -> str:
    return f"Hello, {name}!"


@router.get("", response_class=PlainTextResponse)
async def greeter_default() -> str:
    return "Hello, world!"
