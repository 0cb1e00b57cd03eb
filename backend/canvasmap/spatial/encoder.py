"""Per-item visual encoding: one ``PrimitiveGroup`` per item, chosen by kind.

Encodings:
    shape        filled rectangle in the item's style colours
    sticky_note  rounded rectangle
    text         dashed light-gray outline
    image        tinted box labelled [IMAGE]
    frame        dashed blue outline labelled [FRAME]
    connector    straight line with an arrowhead at the end point
    other        dashed gray box
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from canvasmap.models.items import ConnectorEnd, Item, ItemKind
from canvasmap.models.spatial import ItemPlacement
from canvasmap.spatial.primitives import (
    LabelPrimitive,
    LinePrimitive,
    Primitive,
    PrimitiveGroup,
    RectPrimitive,
)

logger = logging.getLogger(__name__)

DEFAULT_FILL = "#ffffff"
DEFAULT_BORDER = "#000000"
DEFAULT_BORDER_WIDTH = 1.0

TEXT_OUTLINE = "#cccccc"
IMAGE_FILL = "#eeeeff"
FRAME_STROKE = "#0066ff"
OTHER_STROKE = "#999999"
CONNECTOR_STROKE = "#333333"

STICKY_CORNER_RADIUS = 5.0
LABEL_FONT_SIZE = 12.0
FRAME_LABEL_FONT_SIZE = 14.0
FRAME_LABEL_OFFSET = 20.0  # below the frame's top edge

_MAX_LABEL_CHARS = 80

# Named sticky-note colours the canvas accepts in place of hex values.
NAMED_COLORS: dict[str, str] = {
    "gray": "#e6e6e6",
    "light_yellow": "#fff9b1",
    "yellow": "#f5d128",
    "orange": "#ff9d48",
    "light_green": "#d5f692",
    "green": "#c9df56",
    "dark_green": "#93d275",
    "cyan": "#67c6c0",
    "light_pink": "#ffcee0",
    "pink": "#ea94bb",
    "violet": "#c6a2d2",
    "red": "#f0939d",
    "light_blue": "#a6ccf5",
    "blue": "#6cd8fa",
    "dark_blue": "#9ea9ff",
    "black": "#000000",
    "white": "#ffffff",
}


def resolve_color(value: object, default: str | None) -> str | None:
    """Hex colour for a style value; None means "no paint"."""
    if not isinstance(value, str) or not value:
        return default
    color = value.strip().lower()
    if color == "transparent":
        return None
    if color.startswith("#") and len(color) in (4, 7, 9):
        return color[:7] if len(color) == 9 else color
    return NAMED_COLORS.get(color, default)


def _style_width(value: object, default: float) -> float:
    try:
        width = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return width if width >= 0 else default


def _label_text(text: str | None) -> str:
    if not text:
        return ""
    line = " ".join(text.split())
    if len(line) > _MAX_LABEL_CHARS:
        line = line[: _MAX_LABEL_CHARS - 1] + "…"
    return line


def _box(p: ItemPlacement, **kwargs: object) -> RectPrimitive:
    return RectPrimitive(x=p.left, y=p.top, width=p.width, height=p.height, **kwargs)  # type: ignore[arg-type]


def _content_label(p: ItemPlacement, include_text: bool) -> list[Primitive]:
    text = _label_text(p.content) if include_text else ""
    if not text:
        return []
    return [LabelPrimitive(x=p.x, y=p.y, text=text, font_size=LABEL_FONT_SIZE)]


# ── Variant encoders ──


def _encode_shape(item: Item, p: ItemPlacement, include_text: bool) -> list[Primitive]:
    style = p.style
    return [
        _box(
            p,
            fill=resolve_color(style.get("fillColor"), DEFAULT_FILL),
            stroke=resolve_color(style.get("borderColor"), DEFAULT_BORDER),
            stroke_width=_style_width(style.get("borderWidth"), DEFAULT_BORDER_WIDTH),
        ),
        *_content_label(p, include_text),
    ]


def _encode_sticky_note(item: Item, p: ItemPlacement, include_text: bool) -> list[Primitive]:
    style = p.style
    return [
        _box(
            p,
            fill=resolve_color(style.get("fillColor"), DEFAULT_FILL),
            stroke=resolve_color(style.get("borderColor"), DEFAULT_BORDER),
            stroke_width=_style_width(style.get("borderWidth"), DEFAULT_BORDER_WIDTH),
            corner_radius=STICKY_CORNER_RADIUS,
        ),
        *_content_label(p, include_text),
    ]


def _encode_text(item: Item, p: ItemPlacement, include_text: bool) -> list[Primitive]:
    return [
        _box(p, fill=None, stroke=TEXT_OUTLINE, stroke_width=1.0, dash=(5.0, 5.0)),
        *_content_label(p, include_text),
    ]


def _encode_image(item: Item, p: ItemPlacement, include_text: bool) -> list[Primitive]:
    style = p.style
    prims: list[Primitive] = [
        _box(
            p,
            fill=IMAGE_FILL,
            stroke=resolve_color(style.get("borderColor"), DEFAULT_BORDER),
            stroke_width=_style_width(style.get("borderWidth"), DEFAULT_BORDER_WIDTH),
        ),
        LabelPrimitive(x=p.x, y=p.y, text="[IMAGE]", font_size=LABEL_FONT_SIZE),
    ]
    title = _label_text(p.content) if include_text else ""
    if title:
        # under the placeholder, not on top of it
        prims.append(LabelPrimitive(x=p.x, y=p.y + LABEL_FONT_SIZE * 1.5, text=title))
    return prims


def _encode_frame(item: Item, p: ItemPlacement, include_text: bool) -> list[Primitive]:
    title = _label_text(p.content) if include_text else ""
    return [
        _box(p, fill=None, stroke=FRAME_STROKE, stroke_width=2.0, dash=(10.0, 5.0)),
        LabelPrimitive(
            x=p.x,
            y=p.top + FRAME_LABEL_OFFSET,
            text=f"[FRAME] {title}" if title else "[FRAME]",
            font_size=FRAME_LABEL_FONT_SIZE,
            fill=FRAME_STROKE,
            baseline="auto",
        ),
    ]


def _encode_other(item: Item, p: ItemPlacement, include_text: bool) -> list[Primitive]:
    return [
        _box(p, fill=None, stroke=OTHER_STROKE, stroke_width=1.0, dash=(3.0, 3.0)),
        *_content_label(p, include_text),
    ]


# Connectors need the other placements to resolve their ends; handled separately.
_Encoder = Callable[[Item, ItemPlacement, bool], list[Primitive]]

_ENCODERS: dict[ItemKind, _Encoder | None] = {
    ItemKind.SHAPE: _encode_shape,
    ItemKind.STICKY_NOTE: _encode_sticky_note,
    ItemKind.TEXT: _encode_text,
    ItemKind.IMAGE: _encode_image,
    ItemKind.FRAME: _encode_frame,
    ItemKind.CONNECTOR: None,
    ItemKind.OTHER: _encode_other,
}

_missing = set(ItemKind) - set(_ENCODERS)
if _missing:
    raise RuntimeError(f"No visual encoding for item kinds: {sorted(k.value for k in _missing)}")


# ── Connectors ──


def resolve_endpoint(
    end: ConnectorEnd | None,
    placements: Mapping[str, ItemPlacement],
) -> tuple[float, float] | None:
    """Board-global point for a connector end, or None when it can't be resolved."""
    if end is None:
        return None
    if end.has_coordinates:
        return (float(end.x), float(end.y))  # type: ignore[arg-type]
    if end.item is not None:
        target = placements.get(end.item)
        if target is not None:
            return (target.x, target.y)
    return None


def connector_endpoints(
    item: Item,
    placements: Mapping[str, ItemPlacement],
) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """Both board-global ends of a connector, or None if either is unresolved."""
    start_end, end_end = item.connector_ends()
    start = resolve_endpoint(start_end, placements)
    end = resolve_endpoint(end_end, placements)
    if start is None or end is None:
        return None
    return start, end


def encode_connector(
    item: Item,
    p: ItemPlacement,
    placements: Mapping[str, ItemPlacement],
    include_text: bool,
) -> list[Primitive] | None:
    if p.start is not None and p.end is not None:
        start, end = p.start, p.end
    else:
        ends = connector_endpoints(item, placements)
        if ends is None:
            return None
        start, end = ends

    style = p.style
    line = LinePrimitive(
        x1=start[0],
        y1=start[1],
        x2=end[0],
        y2=end[1],
        stroke=resolve_color(style.get("strokeColor") or style.get("borderColor"), CONNECTOR_STROKE)
        or CONNECTOR_STROKE,
        stroke_width=_style_width(style.get("strokeWidth"), 2.0),
        arrow_end=True,
    )
    prims: list[Primitive] = [line]
    text = _label_text(p.content) if include_text else ""
    if text:
        prims.append(
            LabelPrimitive(
                x=(start[0] + end[0]) / 2,
                y=(start[1] + end[1]) / 2,
                text=text,
                font_size=LABEL_FONT_SIZE,
            )
        )
    return prims


# ── Public API ──


def encode_item(
    item: Item,
    placement: ItemPlacement,
    placements: Mapping[str, ItemPlacement],
    include_text: bool = False,
) -> PrimitiveGroup | None:
    """Visual primitives for one item; None for a connector whose ends don't resolve."""
    kind = item.kind
    encoder = _ENCODERS[kind]
    if encoder is None:
        prims = encode_connector(item, placement, placements, include_text)
        if prims is None:
            return None
    else:
        prims = encoder(item, placement, include_text)
    return PrimitiveGroup(
        item_id=item.id,
        kind=kind.value,
        primitives=prims,
        css_class=f"item item-{kind.value.replace('_', '-')}",
    )


def encode_items(
    items: Sequence[Item],
    placements: Sequence[ItemPlacement],
    include_text: bool = False,
) -> tuple[list[PrimitiveGroup], list[str]]:
    """Encode every item in order. Returns (groups, ids of skipped connectors)."""
    by_id = {p.id: p for p in placements}
    groups: list[PrimitiveGroup] = []
    skipped: list[str] = []
    for item, placement in zip(items, placements):
        group = encode_item(item, placement, by_id, include_text)
        if group is None:
            logger.warning("Connector %s skipped: endpoint not in frame", item.id)
            skipped.append(item.id)
            continue
        groups.append(group)
    return groups, skipped
