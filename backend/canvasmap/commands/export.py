"""Whole-board JSON export."""

from __future__ import annotations

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.miro.client import MiroClient
from canvasmap.miro.pagination import fetch_all_items
from canvasmap.models.responses import CommandResult


class ExportBoardArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to export")
    include_images: bool = Field(True, description="Whether to include high-resolution image URLs")


@command(
    name="export_board_as_json",
    group=Group.EXPORT,
    args=ExportBoardArgs,
    description=(
        "Export the board data in JSON format. There is no screenshot API; for a visual export "
        "of a frame use get_frame_spatial_map."
    ),
)
async def export_board_as_json(client: MiroClient, args: ExportBoardArgs) -> CommandResult:
    items = await fetch_all_items(client, args.board_id, page_size=client.page_size)
    exported = []
    for item in items:
        payload = item.to_payload()
        image_url = (item.data or {}).get("imageUrl")
        if args.include_images and item.type == "image" and image_url:
            payload["highResImageUrl"] = f"{image_url}?format=original"
        exported.append(payload)

    return (
        CommandResult.from_text(
            f"Exported {len(exported)} items from board {args.board_id}. "
            "For visual exports, use the get_frame_spatial_map command."
        )
        .add_json(exported)
    )
