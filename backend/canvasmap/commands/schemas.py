"""Argument fragments shared by several commands."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from canvasmap.commands.registry import CommandArgs

Origin = Literal["center", "top-left", "top-right", "bottom-left", "bottom-right"]


class PositionArgs(CommandArgs):
    """Location of the item on the board. The board center is (0, 0)."""

    x: float = Field(0, description="X-axis coordinate of the item's center, absolute to the board.")
    y: float = Field(0, description="Y-axis coordinate of the item's center, absolute to the board.")


class GeometryArgs(CommandArgs):
    """Width or height of the item, in board units."""

    width: float | None = Field(None, gt=0, description="Width of the item, in pixels.")
    height: float | None = Field(None, gt=0, description="Height of the item, in pixels.")


class ParentArgs(CommandArgs):
    id: str | None = Field(
        None, description="ID of the frame the item is attached to. null attaches it to the canvas."
    )


def body_from(**parts: CommandArgs | dict[str, Any] | None) -> dict[str, Any]:
    """Request body from argument models, camelCased, unset parts dropped."""
    body: dict[str, Any] = {}
    for key, part in parts.items():
        if part is None:
            continue
        value = part.model_dump(by_alias=True, exclude_none=True) if isinstance(part, CommandArgs) else part
        if value:
            body[key] = value
    return body


def position_body(x: float, y: float, origin: str | None = None) -> dict[str, Any]:
    position: dict[str, Any] = {"x": x, "y": y}
    if origin:
        position["origin"] = origin
    return position
