"""Spatial map result model: geometric payload plus the visual artifact."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

Point = tuple[float, float]


class FrameBounds(BaseModel):
    """Frame extent in board-global coordinates (origin at board center)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    def as_payload(self) -> dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
        }


class ItemPlacement(BaseModel):
    """One item located both on the board and inside its frame.

    Connectors carry their resolved ends; x/y/width/height are then the
    midpoint and bounding box of the drawn line.
    """

    id: str
    type: str
    kind: str
    x: float
    y: float
    relative_x: float
    relative_y: float
    width: float
    height: float
    style: dict[str, Any] = Field(default_factory=dict)
    content: str | None = None
    start: Point | None = None
    end: Point | None = None
    relative_start: Point | None = None
    relative_end: Point | None = None

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def is_connector(self) -> bool:
        return self.kind == "connector"

    @property
    def has_endpoints(self) -> bool:
        return self.start is not None and self.end is not None

    def as_payload(self, include_text: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "type": self.type}
        # An unresolved connector has no geometry worth reporting
        if not self.is_connector or self.has_endpoints:
            payload["position"] = {"x": self.x, "y": self.y}
            payload["framePosition"] = {"x": self.relative_x, "y": self.relative_y}
            payload["dimensions"] = {"width": self.width, "height": self.height}
        if self.has_endpoints:
            payload["start"] = _point(self.start)
            payload["end"] = _point(self.end)
            payload["frameStart"] = _point(self.relative_start)
            payload["frameEnd"] = _point(self.relative_end)
        if self.style:
            payload["style"] = self.style
        if include_text and self.content:
            payload["content"] = self.content
        return payload

    def summary_line(self) -> str:
        head = f"- {self.id} [{self.type}]"
        if self.is_connector:
            if not self.has_endpoints:
                return f"{head} endpoints unresolved"
            return (
                f"{head} from {_fmt_point(self.start)} to {_fmt_point(self.end)}, "
                f"frame {_fmt_point(self.relative_start)} to {_fmt_point(self.relative_end)}"
            )
        return (
            f"{head} at ({self.x:g}, {self.y:g}), frame ({self.relative_x:g}, {self.relative_y:g}), "
            f"{self.width:g}x{self.height:g}"
        )


def _point(p: Point | None) -> dict[str, float] | None:
    return None if p is None else {"x": p[0], "y": p[1]}


def _fmt_point(p: Point | None) -> str:
    return "(?, ?)" if p is None else f"({p[0]:g}, {p[1]:g})"


class GridTick(BaseModel):
    axis: Literal["x", "y"]
    index: int
    offset: float  # distance from the frame's left/top edge
    position: float  # board-global coordinate
    label: str


class VisualArtifact(BaseModel):
    media_type: Literal["image/svg+xml", "image/png"]
    width: int
    height: int
    scale: float = 1.0  # output units per board unit
    text: str | None = None  # SVG markup
    data: bytes | None = None  # PNG bytes

    @property
    def format(self) -> str:
        return "svg" if self.media_type == "image/svg+xml" else "png"


class SpatialMapResult(BaseModel):
    board_id: str
    frame_id: str
    frame_title: str = ""
    bounds: FrameBounds
    items: list[ItemPlacement] = Field(default_factory=list)
    grid_density: int = 10
    grid: list[GridTick] = Field(default_factory=list)
    skipped_connectors: list[str] = Field(default_factory=list)
    include_text: bool = False
    artifact: VisualArtifact

    @property
    def item_count(self) -> int:
        return len(self.items)

    def summary(self) -> str:
        label = self.frame_title or self.frame_id
        lines = [
            f'Spatial map for frame "{label}" with {self.item_count} items and coordinate system',
            (
                f"Frame {self.frame_id}: {self.bounds.width:g}x{self.bounds.height:g} "
                f"centered at ({self.bounds.x:g}, {self.bounds.y:g}), "
                f"spanning ({self.bounds.left:g}, {self.bounds.top:g}) to "
                f"({self.bounds.right:g}, {self.bounds.bottom:g})"
            ),
        ]
        lines.extend(p.summary_line() for p in self.items)
        if self.skipped_connectors:
            lines.append(f"Connectors not drawn (unresolved endpoints): {', '.join(self.skipped_connectors)}")
        return "\n".join(lines)

    def geometry_payload(self) -> dict[str, Any]:
        return {
            "boardId": self.board_id,
            "frameId": self.frame_id,
            "frameTitle": self.frame_title,
            "frameBounds": self.bounds.as_payload(),
            "itemCount": self.item_count,
            "gridDensity": self.grid_density,
            "items": [p.as_payload(include_text=self.include_text) for p in self.items],
            "skippedConnectors": list(self.skipped_connectors),
            "artifact": {
                "mediaType": self.artifact.media_type,
                "width": self.artifact.width,
                "height": self.artifact.height,
                "scale": self.artifact.scale,
                "origin": {"x": self.bounds.left, "y": self.bounds.top},
            },
        }
