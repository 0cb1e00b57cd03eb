"""Sticky note and bulk item commands."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.commands.schemas import GeometryArgs, ParentArgs, PositionArgs, body_from
from canvasmap.miro.client import MAX_BULK_ITEMS, MiroClient
from canvasmap.models.responses import CommandResult

StickyColor = Literal[
    "gray", "light_yellow", "yellow", "orange", "light_green", "green", "dark_green", "cyan",
    "light_pink", "pink", "violet", "red", "light_blue", "blue", "dark_blue", "black",
]


class StickyNoteData(CommandArgs):
    content: str | None = Field(None, description="The text that appears in the sticky note item.")
    shape: Literal["square", "rectangle"] | None = Field(
        None, description="Geometric shape of the sticky note and aspect ratio for its dimensions."
    )


class StickyNoteStyle(CommandArgs):
    fill_color: StickyColor | None = Field(None, description="Fill color. Default: `light_yellow`.")
    text_align: Literal["left", "right", "center"] | None = Field(
        None, description="Horizontal text alignment. Default: `center`."
    )
    text_align_vertical: Literal["top", "middle", "bottom"] | None = Field(
        None, description="Vertical text alignment. Default: `top`."
    )


class CreateStickyNoteArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to create the sticky note on")
    data: StickyNoteData
    style: StickyNoteStyle
    position: PositionArgs
    geometry: GeometryArgs | None = Field(
        None, description="Set either the width or the height, not both."
    )
    parent: ParentArgs | None = None


class UpdateStickyNoteArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to update the sticky note on")
    item_id: str = Field(..., min_length=1, description="ID of the sticky note item to update")
    data: StickyNoteData | None = None
    style: StickyNoteStyle | None = None
    position: PositionArgs | None = None
    geometry: GeometryArgs | None = None
    parent: ParentArgs | None = None


class DeleteStickyNoteArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to delete the item from")
    item_id: str = Field(..., min_length=1, description="ID of the item to delete")


class BulkCreateArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to create the items on")
    items: list[dict[str, Any]] = Field(
        ...,
        min_length=1,
        max_length=MAX_BULK_ITEMS,
        description=(
            "Items to create in one transaction. Each needs a `type` "
            "(app_card, text, shape, sticky_note, image, document, card, frame, embed) "
            "plus that type's data/style/position/geometry objects."
        ),
    )


@command(
    name="create_sticky_note_item",
    group=Group.CONTENT,
    args=CreateStickyNoteArgs,
    description=(
        "Create a sticky note on a Miro board. By default, sticky notes are 199x228 and come in "
        "the named palette colors (light_yellow, blue, ...)."
    ),
)
async def create_sticky_note_item(client: MiroClient, args: CreateStickyNoteArgs) -> CommandResult:
    body = body_from(
        data=args.data, style=args.style, position=args.position,
        geometry=args.geometry, parent=args.parent,
    )
    note = await client.create_sticky_note(args.board_id, body)
    return CommandResult.from_text(f"Created sticky note {note.id} on board {args.board_id}")


@command(
    name="update_sticky_note_item",
    group=Group.CONTENT,
    args=UpdateStickyNoteArgs,
    description="Updates a sticky note item on a board based on the data and style properties.",
)
async def update_sticky_note_item(client: MiroClient, args: UpdateStickyNoteArgs) -> CommandResult:
    body = body_from(
        data=args.data, style=args.style, position=args.position,
        geometry=args.geometry, parent=args.parent,
    )
    await client.update_sticky_note(args.board_id, args.item_id, body)
    return CommandResult.from_text(f"Updated sticky note item {args.item_id} on board {args.board_id}")


@command(
    name="delete_sticky_note_item",
    group=Group.CONTENT,
    args=DeleteStickyNoteArgs,
    description="Deletes a sticky note item from a Miro board.",
)
async def delete_sticky_note_item(client: MiroClient, args: DeleteStickyNoteArgs) -> CommandResult:
    await client.delete_sticky_note(args.board_id, args.item_id)
    return CommandResult.from_text(f"Deleted sticky note item {args.item_id} on board {args.board_id}")


@command(
    name="create_items_in_bulk",
    group=Group.CONTENT,
    args=BulkCreateArgs,
    description=f"Create multiple items on a Miro board in a single transaction (max {MAX_BULK_ITEMS} items)",
)
async def create_items_in_bulk(client: MiroClient, args: BulkCreateArgs) -> CommandResult:
    missing = [i for i, item in enumerate(args.items) if not item.get("type")]
    if missing:
        raise ValueError(f"Items at positions {missing} have no type")
    created = await client.bulk_create_items(args.board_id, args.items)
    return (
        CommandResult.from_text(f"Created {len(created)} items on board {args.board_id}")
        .add_json([i.to_payload() for i in created])
    )
