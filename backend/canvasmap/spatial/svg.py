"""Write SVG markup for a spatial map.

The document's viewBox is the frame's bounding box in board coordinates, so
an SVG user unit is a board unit and every coordinate in the markup can be
compared directly with the geometric payload.
"""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape, quoteattr

from canvasmap.models.spatial import FrameBounds
from canvasmap.spatial.primitives import (
    LabelPrimitive,
    LinePrimitive,
    Primitive,
    PrimitiveGroup,
    RectPrimitive,
    arrowhead,
)

MEDIA_TYPE = "image/svg+xml"

DEFAULT_STYLES = {
    "text": "font-family: Arial, sans-serif;",
    ".coordinate-grid text": "fill: #666;",
}

_BASELINES = {"middle": "middle", "hanging": "hanging"}


def fmt(value: float) -> str:
    """Compact number: at most two decimals, no trailing ``.0``."""
    rounded = round(float(value), 2)
    if rounded.is_integer():
        return str(int(rounded))
    return str(rounded)


def primitive_to_svg_dicts(prim: Primitive) -> list[dict[str, Any]]:
    """Convert one primitive into SVG element dictionaries (``tag`` + attributes)."""
    if isinstance(prim, RectPrimitive):
        elem: dict[str, Any] = {
            "tag": "rect",
            "x": fmt(prim.x),
            "y": fmt(prim.y),
            "width": fmt(prim.width),
            "height": fmt(prim.height),
            "fill": prim.fill or "none",
            "stroke": prim.stroke or "none",
            "stroke-width": fmt(prim.stroke_width),
        }
        if prim.corner_radius:
            elem["rx"] = fmt(prim.corner_radius)
            elem["ry"] = fmt(prim.corner_radius)
        if prim.dash:
            elem["stroke-dasharray"] = ",".join(fmt(d) for d in prim.dash)
        if prim.opacity != 1.0:
            elem["opacity"] = fmt(prim.opacity)
        return [elem]

    if isinstance(prim, LinePrimitive):
        line: dict[str, Any] = {
            "tag": "line",
            "x1": fmt(prim.x1),
            "y1": fmt(prim.y1),
            "x2": fmt(prim.x2),
            "y2": fmt(prim.y2),
            "stroke": prim.stroke,
            "stroke-width": fmt(prim.stroke_width),
        }
        if prim.dash:
            line["stroke-dasharray"] = ",".join(fmt(d) for d in prim.dash)
        out = [line]
        if prim.arrow_end:
            head = arrowhead(prim)
            if head:
                out.append({
                    "tag": "polygon",
                    "class": "arrowhead",
                    "points": " ".join(f"{fmt(x)},{fmt(y)}" for x, y in head),
                    "fill": prim.stroke,
                })
        return out

    if isinstance(prim, LabelPrimitive):
        label: dict[str, Any] = {
            "tag": "text",
            "x": fmt(prim.x),
            "y": fmt(prim.y),
            "text-anchor": prim.anchor,
            "font-size": fmt(prim.font_size),
            "fill": prim.fill,
            "text": prim.text,
        }
        if prim.baseline in _BASELINES:
            label["dominant-baseline"] = _BASELINES[prim.baseline]
        return [label]

    raise TypeError(f"Unsupported primitive: {type(prim).__name__}")


def _render_element(elem: dict[str, Any], indent: str) -> str:
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in ("tag", "text")}
    attr_str = " ".join(f"{k}={quoteattr(str(v))}" for k, v in attrs.items())
    if "text" in elem:
        return f"{indent}<{tag} {attr_str}>{escape(str(elem['text']))}</{tag}>"
    return f"{indent}<{tag} {attr_str} />"


def render_group(group: PrimitiveGroup, indent: str = "  ") -> list[str]:
    attrs = {"data-item-id": group.item_id, "data-kind": group.kind}
    if group.css_class:
        attrs = {"class": group.css_class, **attrs}
    attr_str = " ".join(f"{k}={quoteattr(v)}" for k, v in attrs.items())
    lines = [f"{indent}<g {attr_str}>"]
    for prim in group.primitives:
        for elem in primitive_to_svg_dicts(prim):
            lines.append(_render_element(elem, indent + "  "))
    lines.append(f"{indent}</g>")
    return lines


def serialize_svg(
    bounds: FrameBounds,
    grid: PrimitiveGroup | None,
    groups: list[PrimitiveGroup],
    title: str = "",
    description: str = "",
    styles: dict[str, str] | None = None,
) -> str:
    """Complete SVG document for one frame."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{fmt(bounds.width)}" height="{fmt(bounds.height)}"'
        f' viewBox="{fmt(bounds.left)} {fmt(bounds.top)} {fmt(bounds.width)} {fmt(bounds.height)}"'
        ' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")

    styles = DEFAULT_STYLES if styles is None else styles
    if styles:
        lines.append("  <style>")
        for selector, props in styles.items():
            lines.append(f"    {selector} {{ {props} }}")
        lines.append("  </style>")

    if grid is not None:
        lines.append("  <!-- Coordinate grid -->")
        lines.extend(render_group(grid))

    lines.append("  <!-- Frame background -->")
    lines.append(
        _render_element(
            {
                "tag": "rect",
                "class": "frame-background",
                "x": fmt(bounds.left),
                "y": fmt(bounds.top),
                "width": fmt(bounds.width),
                "height": fmt(bounds.height),
                "fill": "#ffffff",
                "opacity": "0.1",
            },
            "  ",
        )
    )

    lines.append("  <!-- Items -->")
    for group in groups:
        lines.extend(render_group(group))

    lines.append("</svg>")
    return "\n".join(lines)
