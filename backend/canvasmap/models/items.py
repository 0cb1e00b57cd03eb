"""Remote canvas entities as returned by the board/item endpoints.

Models are permissive: fields the API returns but we don't model are kept as
extras so pass-through commands can hand them back unchanged.
"""

from __future__ import annotations

import enum
import html
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_TAG_RE = re.compile(r"<[^>]+>")
_BLOCK_BREAK_RE = re.compile(r"</p>|<br\s*/?>", re.IGNORECASE)


class ItemKind(str, enum.Enum):
    """Visual variants an item is drawn as. Every type tag maps onto exactly one."""

    SHAPE = "shape"
    STICKY_NOTE = "sticky_note"
    TEXT = "text"
    IMAGE = "image"
    FRAME = "frame"
    CONNECTOR = "connector"
    OTHER = "other"

    @classmethod
    def from_type(cls, type_tag: str | None) -> ItemKind:
        if type_tag in ("connector", "line"):
            return cls.CONNECTOR
        try:
            return cls(type_tag)
        except ValueError:
            return cls.OTHER


class _CanvasModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Position(_CanvasModel):
    x: float = 0.0
    y: float = 0.0
    origin: str | None = None
    relative_to: str | None = None  # "canvas_center" or "parent_top_left"


class ConnectorEnd(_CanvasModel):
    """One end of a connector: explicit coordinates and/or a referenced item."""

    x: float | None = None
    y: float | None = None
    item: str | None = None

    @field_validator("item", mode="before")
    @classmethod
    def _item_id(cls, value: Any) -> Any:
        # The API nests references as {"id": "..."} in some payloads
        if isinstance(value, dict):
            return value.get("id")
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def has_coordinates(self) -> bool:
        return self.x is not None and self.y is not None


class Geometry(_CanvasModel):
    width: float | None = None
    height: float | None = None
    rotation: float | None = None
    start: ConnectorEnd | None = None
    end: ConnectorEnd | None = None


class Item(_CanvasModel):
    id: str
    type: str = "unknown"
    position: Position | None = None
    geometry: Geometry | None = None
    style: dict[str, Any] | None = None
    data: dict[str, Any] | None = None
    content: str | None = None
    title: str | None = None
    parent: dict[str, Any] | None = None
    start: ConnectorEnd | None = None
    end: ConnectorEnd | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @property
    def kind(self) -> ItemKind:
        return ItemKind.from_type(self.type)

    @property
    def item_text(self) -> str:
        """Plain-text content of the item (HTML markup removed)."""
        data = self.data or {}
        raw = self.content or data.get("content") or data.get("title") or self.title or ""
        return html_to_text(str(raw))

    @property
    def display_title(self) -> str:
        data = self.data or {}
        return html_to_text(str(self.title or data.get("title") or ""))

    def connector_ends(self) -> tuple[ConnectorEnd | None, ConnectorEnd | None]:
        """Start/end of a connector, looked up in geometry first, then top level."""
        geometry = self.geometry
        start = geometry.start if geometry and geometry.start else self.start
        end = geometry.end if geometry and geometry.end else self.end
        extras = self.model_extra or {}
        if start is None and isinstance(extras.get("startItem"), dict):
            start = ConnectorEnd(item=extras["startItem"].get("id"))
        if end is None and isinstance(extras.get("endItem"), dict):
            end = ConnectorEnd(item=extras["endItem"].get("id"))
        return start, end

    def to_payload(self) -> dict[str, Any]:
        """Item as the API spelled it (camelCase, extras kept, unset fields dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ItemPage(BaseModel):
    """One page of a cursor-paginated item listing."""

    model_config = ConfigDict(extra="allow")

    data: list[Item] = Field(default_factory=list)
    cursor: str | None = None
    total: int | None = None
    size: int | None = None
    limit: int | None = None


class Board(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    description: str | None = None


class BoardPage(BaseModel):
    model_config = ConfigDict(extra="allow")

    data: list[Board] = Field(default_factory=list)


def html_to_text(value: str) -> str:
    """Strip the rich-text markup the canvas stores item content in."""
    if not value:
        return ""
    text = _BLOCK_BREAK_RE.sub("\n", value)
    text = _TAG_RE.sub("", text)
    return html.unescape(text).strip()
