"""Board-global ↔ frame-relative coordinate conversion.

Board coordinates have their origin at the board center and item positions
name the item's center. Frame-relative coordinates are offsets from the
frame's top-left corner. Both the geometric payload and every renderer go
through ``place_item`` so the numbers and the picture can't drift apart.
"""

from __future__ import annotations

from canvasmap.models.items import Item
from canvasmap.models.spatial import FrameBounds, ItemPlacement

# Missing frame geometry: large enough to keep grid spacing non-degenerate.
DEFAULT_FRAME_WIDTH = 1000.0
DEFAULT_FRAME_HEIGHT = 1000.0

# Missing item geometry: a visible box at schematic scale.
DEFAULT_ITEM_WIDTH = 100.0
DEFAULT_ITEM_HEIGHT = 100.0

PARENT_TOP_LEFT = "parent_top_left"


def frame_bounds(frame: Item, parent: FrameBounds | None = None) -> FrameBounds:
    """Frame extent, with 1000×1000 assumed when the frame has no geometry.

    A frame nested in another frame reports its center relative to the
    parent's top-left corner; pass the parent's bounds to shift it back
    into board coordinates. Without them the position is taken as is.
    """
    pos = frame.position
    geo = frame.geometry
    x = pos.x if pos else 0.0
    y = pos.y if pos else 0.0
    if parent is not None and pos is not None and pos.relative_to == PARENT_TOP_LEFT:
        x, y = to_board_global(parent, x, y)
    return FrameBounds(
        x=x,
        y=y,
        width=(geo.width if geo and geo.width else DEFAULT_FRAME_WIDTH),
        height=(geo.height if geo and geo.height else DEFAULT_FRAME_HEIGHT),
    )


def parent_frame_id(frame: Item) -> str | None:
    """Id of the enclosing frame when ``frame`` is positioned relative to it."""
    pos = frame.position
    if pos is None or pos.relative_to != PARENT_TOP_LEFT or not frame.parent:
        return None
    parent_id = frame.parent.get("id")
    return str(parent_id) if parent_id else None


def effective_position(item: Item, bounds: FrameBounds) -> tuple[float, float]:
    """Board-global center of an item; (0, 0) when the item has no position.

    Children reported relative to their parent's top-left corner are shifted
    back into board coordinates using the frame extent.
    """
    pos = item.position
    if pos is None:
        return (0.0, 0.0)
    if pos.relative_to == PARENT_TOP_LEFT:
        return (bounds.left + pos.x, bounds.top + pos.y)
    return (pos.x, pos.y)


def effective_size(item: Item) -> tuple[float, float]:
    """Width/height of an item; 100 for each missing dimension."""
    geo = item.geometry
    width = geo.width if geo and geo.width else DEFAULT_ITEM_WIDTH
    height = geo.height if geo and geo.height else DEFAULT_ITEM_HEIGHT
    return (width, height)


def to_frame_relative(bounds: FrameBounds, x: float, y: float) -> tuple[float, float]:
    """Offset of a board-global point from the frame's top-left corner."""
    return (x - bounds.left, y - bounds.top)


def to_board_global(bounds: FrameBounds, rel_x: float, rel_y: float) -> tuple[float, float]:
    """Inverse of ``to_frame_relative``."""
    return (rel_x + bounds.left, rel_y + bounds.top)


def place_item(item: Item, bounds: FrameBounds) -> ItemPlacement:
    """Locate one item on the board and within the frame."""
    x, y = effective_position(item, bounds)
    rel_x, rel_y = to_frame_relative(bounds, x, y)
    width, height = effective_size(item)
    return ItemPlacement(
        id=item.id,
        type=item.type,
        kind=item.kind.value,
        x=x,
        y=y,
        relative_x=rel_x,
        relative_y=rel_y,
        width=width,
        height=height,
        style=dict(item.style or {}),
        content=item.item_text or None,
    )


def place_connector(
    placement: ItemPlacement,
    start: tuple[float, float],
    end: tuple[float, float],
    bounds: FrameBounds,
) -> ItemPlacement:
    """Attach resolved board-global ends to a connector's placement.

    Position and size become the midpoint and bounding box of the segment.
    """
    x = (start[0] + end[0]) / 2
    y = (start[1] + end[1]) / 2
    rel_x, rel_y = to_frame_relative(bounds, x, y)
    return placement.model_copy(update={
        "x": x,
        "y": y,
        "relative_x": rel_x,
        "relative_y": rel_y,
        "width": abs(end[0] - start[0]),
        "height": abs(end[1] - start[1]),
        "start": start,
        "end": end,
        "relative_start": to_frame_relative(bounds, *start),
        "relative_end": to_frame_relative(bounds, *end),
    })
