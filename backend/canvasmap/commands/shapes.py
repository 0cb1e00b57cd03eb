"""Shape creation and lookup commands."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.commands.schemas import GeometryArgs, ParentArgs, PositionArgs, body_from
from canvasmap.errors import ItemTypeError
from canvasmap.miro.client import MiroClient
from canvasmap.miro.pagination import fetch_all_items
from canvasmap.models.items import Item
from canvasmap.models.responses import CommandResult


class ShapeData(CommandArgs):
    content: str | None = Field(None, description="Text displayed on the shape.")
    shape: str | None = Field(
        None, description="Geometric shape rendered on the board (rectangle, circle, triangle, ...)."
    )


class CreateShapeArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to create the shape on")
    data: ShapeData | None = None
    style: dict[str, Any] | None = Field(
        None,
        description="Shape style: fillColor, borderColor, borderWidth, borderStyle, fontSize, textAlign, ...",
    )
    position: PositionArgs | None = None
    geometry: GeometryArgs | None = None
    parent: ParentArgs | None = None


class ShapeDetailsArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board containing the shape")
    shape_id: str = Field(..., min_length=1, description="ID of the shape to get details for")


class ShapesByTypeArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to search in")
    shape_type: str = Field(
        ..., min_length=1, description="Type of shape to look for (e.g., circle, rectangle, etc.)"
    )


def _shape_kind(item: Item) -> str | None:
    data = item.data or {}
    extras = item.model_extra or {}
    return data.get("shape") or extras.get("shape")


def shape_details(item: Item) -> dict[str, Any]:
    return {
        "id": item.id,
        "type": item.type,
        "shape": _shape_kind(item),
        "x": item.position.x if item.position else None,
        "y": item.position.y if item.position else None,
        "width": item.geometry.width if item.geometry else None,
        "height": item.geometry.height if item.geometry else None,
        "style": item.style,
        "content": item.item_text or None,
    }


@command(
    name="create_shape",
    group=Group.SHAPES,
    args=CreateShapeArgs,
    description="Create a shape (rectangle, circle, triangle, ...) on a Miro board",
)
async def create_shape(client: MiroClient, args: CreateShapeArgs) -> CommandResult:
    body = body_from(
        data=args.data, style=args.style, position=args.position,
        geometry=args.geometry, parent=args.parent,
    )
    shape = await client.create_shape(args.board_id, body)
    return CommandResult.from_text(f"Created shape {shape.id} on board {args.board_id}")


@command(
    name="get_shape_details",
    group=Group.SHAPES,
    args=ShapeDetailsArgs,
    description="Get detailed information about a shape including coordinates and style",
)
async def get_shape_details(client: MiroClient, args: ShapeDetailsArgs) -> CommandResult:
    item = await client.get_item(args.board_id, args.shape_id)
    if item.type != "shape":
        raise ItemTypeError(args.shape_id, "shape", item.type)
    return CommandResult().add_json(shape_details(item))


@command(
    name="get_shapes_by_type",
    group=Group.SHAPES,
    args=ShapesByTypeArgs,
    description="Get all shapes of a specific type on a board",
)
async def get_shapes_by_type(client: MiroClient, args: ShapesByTypeArgs) -> CommandResult:
    items = await fetch_all_items(client, args.board_id, item_type="shape", page_size=client.page_size)
    matches = [shape_details(i) for i in items if i.type == "shape" and _shape_kind(i) == args.shape_type]
    return (
        CommandResult.from_text(f"Found {len(matches)} {args.shape_type} shapes on board {args.board_id}")
        .add_json({"shapes": matches})
    )
