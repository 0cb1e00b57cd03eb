"""Coordinate ruler overlaid on the frame: ticks, labels and a border."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from canvasmap.errors import InvalidGridDensityError
from canvasmap.models.spatial import FrameBounds, GridTick
from canvasmap.spatial.primitives import LabelPrimitive, LinePrimitive, PrimitiveGroup, RectPrimitive

MIN_GRID_DENSITY = 4
MAX_GRID_DENSITY = 20
DEFAULT_GRID_DENSITY = 10

TICK_LENGTH = 10.0
TICK_COLOR = "#999999"
LABEL_COLOR = "#666666"
BORDER_COLOR = "#666666"
LABEL_FONT_SIZE = 10.0
# Labels sit just inside the frame, past the end of the tick mark
_X_LABEL_INSET = TICK_LENGTH + 12.0
_Y_LABEL_INSET = TICK_LENGTH + 4.0


@dataclass
class GridOverlay:
    x_ticks: list[GridTick] = field(default_factory=list)
    y_ticks: list[GridTick] = field(default_factory=list)
    group: PrimitiveGroup = field(
        default_factory=lambda: PrimitiveGroup(item_id="grid", kind="grid", css_class="coordinate-grid")
    )

    @property
    def ticks(self) -> list[GridTick]:
        return self.x_ticks + self.y_ticks


def validate_grid_density(density: object) -> int:
    """Accept an integer in [4, 20]; anything else is a caller error."""
    if isinstance(density, bool) or not isinstance(density, (int, np.integer)):
        raise InvalidGridDensityError(f"Grid density must be an integer, got {density!r}")
    if not MIN_GRID_DENSITY <= density <= MAX_GRID_DENSITY:
        raise InvalidGridDensityError(
            f"Grid density must be between {MIN_GRID_DENSITY} and {MAX_GRID_DENSITY}, got {density}"
        )
    return int(density)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _axis_ticks(axis: str, origin: float, extent: float, density: int) -> list[GridTick]:
    offsets = np.linspace(0.0, extent, density + 1)
    return [
        GridTick(
            axis=axis,  # type: ignore[arg-type]
            index=i,
            offset=float(offset),
            position=origin + float(offset),
            label=str(round_half_up(origin + float(offset))),
        )
        for i, offset in enumerate(offsets)
    ]


def build_grid(bounds: FrameBounds, density: int = DEFAULT_GRID_DENSITY) -> GridOverlay:
    """``density + 1`` ticks per axis, labelled with board-global coordinates."""
    density = validate_grid_density(density)
    left, top = bounds.left, bounds.top

    overlay = GridOverlay(
        x_ticks=_axis_ticks("x", left, bounds.width, density),
        y_ticks=_axis_ticks("y", top, bounds.height, density),
    )
    prims = overlay.group.primitives

    for tick in overlay.x_ticks:
        prims.append(
            LinePrimitive(x1=tick.position, y1=top, x2=tick.position, y2=top + TICK_LENGTH,
                          stroke=TICK_COLOR, stroke_width=1.0)
        )
        prims.append(
            LabelPrimitive(x=tick.position, y=top + _X_LABEL_INSET, text=tick.label,
                           font_size=LABEL_FONT_SIZE, fill=LABEL_COLOR, anchor="middle", baseline="auto")
        )

    for tick in overlay.y_ticks:
        prims.append(
            LinePrimitive(x1=left, y1=tick.position, x2=left + TICK_LENGTH, y2=tick.position,
                          stroke=TICK_COLOR, stroke_width=1.0)
        )
        prims.append(
            LabelPrimitive(x=left + _Y_LABEL_INSET, y=tick.position, text=tick.label,
                           font_size=LABEL_FONT_SIZE, fill=LABEL_COLOR, anchor="start", baseline="middle")
        )

    prims.append(
        RectPrimitive(x=left, y=top, width=bounds.width, height=bounds.height,
                      fill=None, stroke=BORDER_COLOR, stroke_width=1.0)
    )
    return overlay
