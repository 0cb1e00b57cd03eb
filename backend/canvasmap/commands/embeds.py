"""Embed (iframe) creation."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.commands.schemas import Origin, position_body
from canvasmap.miro.client import MiroClient
from canvasmap.models.responses import CommandResult

logger = logging.getLogger(__name__)


class CreateEmbedArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to create the embed on")
    url: str = Field(..., min_length=1, description="URL of the content to embed (YouTube, Figma, Google Docs, ...)")
    x: float = Field(0, description="X coordinate on the board")
    y: float = Field(0, description="Y coordinate on the board")
    width: float | None = Field(None, gt=0, description="Width of the embed")
    height: float | None = Field(None, gt=0, description="Height of the embed")
    mode: Literal["inline", "modal"] = Field("inline", description="How the embed is displayed")
    preview_url: str | None = Field(None, description="URL of an image shown as the embed preview")
    origin: Origin = Field("center", description="Origin point for positioning")


@command(
    name="create_embed",
    group=Group.EMBEDS,
    args=CreateEmbedArgs,
    description="Create an embed (iframe) item on a Miro board",
)
async def create_embed(client: MiroClient, args: CreateEmbedArgs) -> CommandResult:
    geometry = {}
    if args.width is not None:
        geometry["width"] = args.width
    if args.height is not None:
        geometry["height"] = args.height
    if len(geometry) == 2:
        logger.warning(
            "Embed on board %s sets both width and height; fixed aspect ratio content may be distorted",
            args.board_id,
        )

    embed = await client.create_embed(
        args.board_id,
        args.url,
        position_body(args.x, args.y, args.origin),
        geometry or None,
        mode=args.mode,
        preview_url=args.preview_url,
    )

    width = embed.geometry.width if embed.geometry and embed.geometry.width else "auto"
    height = embed.geometry.height if embed.geometry and embed.geometry.height else "auto"
    provider = (embed.data or {}).get("providerName") or "Unknown"
    return CommandResult.from_text(
        f"Created embed with ID {embed.id} on board {args.board_id}",
        f"Embed dimensions: {width} x {height}",
        f"Provider: {provider}",
    )
