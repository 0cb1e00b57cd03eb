"""Rasterize a spatial map with Pillow drawing calls.

Pixel = (board coordinate − frame top-left) × scale. The scale keeps the
longest side within ``max_size`` and is reported with the artifact so pixels
can be mapped back onto board coordinates.
"""

from __future__ import annotations

import io
import logging
import math
from functools import lru_cache

from PIL import Image, ImageColor, ImageDraw, ImageFont

from canvasmap.models.spatial import FrameBounds
from canvasmap.spatial.primitives import (
    LabelPrimitive,
    LinePrimitive,
    Primitive,
    PrimitiveGroup,
    RectPrimitive,
    arrowhead,
)

logger = logging.getLogger(__name__)

MEDIA_TYPE = "image/png"
DEFAULT_MAX_SIZE = 2048

# Below this text is unreadable regardless of scale.
_MIN_FONT_PX = 8

Point = tuple[float, float]


def raster_scale(bounds: FrameBounds, max_size: int = DEFAULT_MAX_SIZE) -> float:
    """Board→pixel factor; frames larger than ``max_size`` are shrunk, never enlarged."""
    longest = max(bounds.width, bounds.height)
    if longest <= 0:
        return 1.0
    return min(1.0, max_size / longest)


@lru_cache(maxsize=32)
def _font(size_px: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size_px)


def _rgba(color: str | None, opacity: float = 1.0) -> tuple[int, int, int, int] | None:
    if color is None:
        return None
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b, int(round(255 * opacity)))


def _dashed_segments(p1: Point, p2: Point, dash: tuple[float, float]) -> list[tuple[Point, Point]]:
    on, off = dash
    dx, dy = p2[0] - p1[0], p2[1] - p1[1]
    length = math.hypot(dx, dy)
    if length == 0 or on <= 0:
        return [(p1, p2)]
    ux, uy = dx / length, dy / length
    segments = []
    pos = 0.0
    while pos < length:
        end = min(pos + on, length)
        segments.append(((p1[0] + ux * pos, p1[1] + uy * pos), (p1[0] + ux * end, p1[1] + uy * end)))
        pos = end + off
    return segments


class RasterCanvas:
    """Pillow image bound to a frame's coordinate space."""

    def __init__(self, bounds: FrameBounds, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self.bounds = bounds
        self.scale = raster_scale(bounds, max_size)
        self.width = max(1, int(round(bounds.width * self.scale)))
        self.height = max(1, int(round(bounds.height * self.scale)))
        self.image = Image.new("RGBA", (self.width, self.height), (255, 255, 255, 255))
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def to_px(self, x: float, y: float) -> Point:
        return ((x - self.bounds.left) * self.scale, (y - self.bounds.top) * self.scale)

    def _px_width(self, width: float) -> int:
        return max(1, int(round(width * self.scale)))

    def _dash_px(self, dash: tuple[float, float]) -> tuple[float, float]:
        return (max(1.0, dash[0] * self.scale), max(1.0, dash[1] * self.scale))

    def _stroke_path(self, points: list[Point], color, width: int, dash: tuple[float, float] | None) -> None:
        for a, b in zip(points, points[1:]):
            if dash:
                for s, e in _dashed_segments(a, b, self._dash_px(dash)):
                    self._draw.line([s, e], fill=color, width=width)
            else:
                self._draw.line([a, b], fill=color, width=width)

    def draw_rect(self, rect: RectPrimitive) -> None:
        x0, y0 = self.to_px(rect.x, rect.y)
        x1, y1 = self.to_px(rect.x + rect.width, rect.y + rect.height)
        box = [x0, y0, max(x0, x1), max(y0, y1)]
        fill = _rgba(rect.fill, rect.opacity)
        stroke = _rgba(rect.stroke, rect.opacity)
        width = self._px_width(rect.stroke_width)
        radius = rect.corner_radius * self.scale

        if rect.dash and stroke is not None:
            if fill is not None:
                self._draw.rectangle(box, fill=fill)
            corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1), (x0, y0)]
            self._stroke_path(corners, stroke, width, rect.dash)
        elif radius >= 1:
            self._draw.rounded_rectangle(box, radius=radius, fill=fill, outline=stroke, width=width)
        else:
            self._draw.rectangle(box, fill=fill, outline=stroke, width=width)

    def draw_line(self, line: LinePrimitive) -> None:
        color = _rgba(line.stroke)
        start = self.to_px(line.x1, line.y1)
        end = self.to_px(line.x2, line.y2)
        self._stroke_path([start, end], color, self._px_width(line.stroke_width), line.dash)
        if line.arrow_end:
            head = [self.to_px(x, y) for x, y in arrowhead(line)]
            if head:
                self._draw.polygon(head, fill=color)

    def draw_label(self, label: LabelPrimitive) -> None:
        font = _font(max(_MIN_FONT_PX, int(round(label.font_size * self.scale))))
        x, y = self.to_px(label.x, label.y)
        left, top, right, bottom = self._draw.textbbox((0, 0), label.text, font=font)
        w, h = right - left, bottom - top
        if label.anchor == "middle":
            x -= w / 2
        elif label.anchor == "end":
            x -= w
        if label.baseline == "middle":
            y -= h / 2
        elif label.baseline == "auto":
            y -= h
        self._draw.text((x - left, y - top), label.text, font=font, fill=_rgba(label.fill))

    def draw(self, prim: Primitive) -> None:
        if isinstance(prim, RectPrimitive):
            self.draw_rect(prim)
        elif isinstance(prim, LinePrimitive):
            self.draw_line(prim)
        elif isinstance(prim, LabelPrimitive):
            self.draw_label(prim)
        else:
            raise TypeError(f"Unsupported primitive: {type(prim).__name__}")

    def draw_group(self, group: PrimitiveGroup) -> None:
        for prim in group.primitives:
            self.draw(prim)

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.convert("RGB").save(buf, format="PNG")
        return buf.getvalue()


def render_png(
    bounds: FrameBounds,
    grid: PrimitiveGroup | None,
    groups: list[PrimitiveGroup],
    max_size: int = DEFAULT_MAX_SIZE,
) -> tuple[bytes, RasterCanvas]:
    """PNG bytes for one frame, plus the canvas (for its size and scale)."""
    canvas = RasterCanvas(bounds, max_size)
    if grid is not None:
        canvas.draw_group(grid)
    for group in groups:
        canvas.draw_group(group)
    logger.debug(
        "Rasterized %d groups at %dx%d (scale %.3f)",
        len(groups), canvas.width, canvas.height, canvas.scale,
    )
    return canvas.to_png(), canvas
