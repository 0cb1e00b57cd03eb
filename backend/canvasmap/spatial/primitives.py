"""Backend-neutral drawing primitives.

Coordinates are board-global. Emitters decide how board units map onto their
output (SVG user units, PNG pixels).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

Anchor = Literal["start", "middle", "end"]
Baseline = Literal["auto", "middle", "hanging"]


@dataclass(frozen=True)
class RectPrimitive:
    x: float  # left
    y: float  # top
    width: float
    height: float
    fill: str | None = None  # None = no fill
    stroke: str | None = "#000000"
    stroke_width: float = 1.0
    dash: tuple[float, float] | None = None
    corner_radius: float = 0.0
    opacity: float = 1.0


@dataclass(frozen=True)
class LinePrimitive:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = "#000000"
    stroke_width: float = 1.0
    dash: tuple[float, float] | None = None
    arrow_end: bool = False


@dataclass(frozen=True)
class LabelPrimitive:
    x: float
    y: float
    text: str
    font_size: float = 12.0
    fill: str = "#000000"
    anchor: Anchor = "middle"
    baseline: Baseline = "middle"


Primitive = Union[RectPrimitive, LinePrimitive, LabelPrimitive]


@dataclass
class PrimitiveGroup:
    """Everything drawn for one item (or for the grid overlay)."""

    item_id: str
    kind: str
    primitives: list[Primitive] = field(default_factory=list)
    css_class: str = ""


# Arrowhead geometry shared by every emitter, in board units
ARROW_LENGTH = 12.0
ARROW_HALF_WIDTH = 5.0


def arrowhead(line: LinePrimitive) -> list[tuple[float, float]]:
    """Triangle at the end of a line: tip, then the two back corners."""
    dx = line.x2 - line.x1
    dy = line.y2 - line.y1
    length = (dx * dx + dy * dy) ** 0.5
    if length == 0:
        return []
    ux, uy = dx / length, dy / length
    back_x = line.x2 - ux * ARROW_LENGTH
    back_y = line.y2 - uy * ARROW_LENGTH
    return [
        (line.x2, line.y2),
        (back_x - uy * ARROW_HALF_WIDTH, back_y + ux * ARROW_HALF_WIDTH),
        (back_x + uy * ARROW_HALF_WIDTH, back_y - ux * ARROW_HALF_WIDTH),
    ]
