"""Board and item listing commands."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.miro.client import MAX_PAGE_SIZE, MIN_PAGE_SIZE, MiroClient
from canvasmap.miro.pagination import fetch_all_items
from canvasmap.models.responses import CommandResult

ItemTypeFilter = Literal[
    "text", "shape", "sticky_note", "image", "document", "card", "app_card", "preview", "frame", "embed"
]


class ListBoardsArgs(CommandArgs):
    pass


class BoardArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to get frames from")


class FrameItemsArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board that contains the frame")
    frame_id: str = Field(..., min_length=1, description="ID of the frame to get items from")


class ItemsOnBoardArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to get items from")
    limit: int = Field(
        10,
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
        description=(
            "The maximum number of results to return per call. If more items exist, "
            "the response carries a cursor."
        ),
    )
    type: ItemTypeFilter | None = Field(
        None, description="Only return items of this type."
    )
    cursor: str | None = Field(
        None,
        description="Cursor from a previous response; returns the next portion of the results.",
    )


@command(
    name="list_boards",
    group=Group.BOARDS,
    args=ListBoardsArgs,
    description="List all available Miro boards and their IDs",
)
async def list_boards(client: MiroClient, args: ListBoardsArgs) -> CommandResult:
    boards = await client.get_boards()
    result = CommandResult.from_text("Here are the available Miro boards:")
    for board in boards:
        result.add_text(f"Board ID: {board.id}, Name: {board.name}")
    return result


@command(
    name="get_frames",
    group=Group.BOARDS,
    args=BoardArgs,
    description="Get all frames from a Miro board",
)
async def get_frames(client: MiroClient, args: BoardArgs) -> CommandResult:
    frames = await fetch_all_items(client, args.board_id, item_type="frame", page_size=client.page_size)
    return (
        CommandResult.from_text(f"Found {len(frames)} frames on board {args.board_id}")
        .add_json([f.to_payload() for f in frames])
    )


@command(
    name="get_items_in_frame",
    group=Group.BOARDS,
    args=FrameItemsArgs,
    description="Get all items contained within a specific frame on a Miro board",
)
async def get_items_in_frame(client: MiroClient, args: FrameItemsArgs) -> CommandResult:
    items = await fetch_all_items(
        client, args.board_id, parent_item_id=args.frame_id, page_size=client.page_size
    )
    return (
        CommandResult.from_text(f"Found {len(items)} items in frame {args.frame_id}")
        .add_json([i.to_payload() for i in items])
    )


@command(
    name="get_items_on_board",
    group=Group.BOARDS,
    args=ItemsOnBoardArgs,
    description=(
        "Retrieves one page of items for a board. Filter by item type, and pass the returned "
        "cursor back to get the next page."
    ),
)
async def get_items_on_board(client: MiroClient, args: ItemsOnBoardArgs) -> CommandResult:
    page = await client.list_items(
        args.board_id, item_type=args.type, cursor=args.cursor, limit=args.limit
    )
    payload = {"data": [i.to_payload() for i in page.data], "cursor": page.cursor}
    more = "more items available" if page.cursor else "no more items"
    return (
        CommandResult.from_text(f"Retrieved {len(page.data)} items from board {args.board_id} ({more})")
        .add_json(payload)
    )
