"""GET /api/commands and POST /api/commands/{name}."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from canvasmap.commands.registry import get_registry
from canvasmap.commands.router import dispatch
from canvasmap.config import Settings
from canvasmap.dependencies import get_miro_client, get_settings
from canvasmap.miro.client import MiroClient
from canvasmap.models.responses import CommandInfo, CommandListResponse, CommandResult

router = APIRouter()


@router.get("/commands", response_model=CommandListResponse)
async def list_commands() -> CommandListResponse:
    return CommandListResponse(
        commands=[CommandInfo(**spec.describe()) for spec in get_registry().all()]
    )


@router.post("/commands/{name}", response_model=CommandResult)
async def run_command(
    name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    client: MiroClient = Depends(get_miro_client),
    settings: Settings = Depends(get_settings),
) -> CommandResult:
    return await dispatch(name, arguments, client, timeout=settings.command_timeout)
