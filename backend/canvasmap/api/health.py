"""Health check + prompt endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from canvasmap import __version__
from canvasmap.commands.registry import get_registry
from canvasmap.models.responses import HealthResponse
from canvasmap.prompts import get_all_prompts, get_prompt

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        commands_registered=get_registry().count,
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    return get_all_prompts()


@router.get("/prompts/{name}")
async def prompt(name: str) -> dict[str, str]:
    try:
        text = get_prompt(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown prompt: {name}") from None
    return {"name": name, "role": "user", "text": text}
