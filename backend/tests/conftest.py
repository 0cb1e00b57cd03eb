"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from canvasmap.errors import MiroAPIError
from canvasmap.miro.client import MiroClient
from canvasmap.models.items import Board, Item, ItemPage


# Sample payloads shaped like the remote item endpoints

FRAME = {
    "id": "3458764600000000001",
    "type": "frame",
    "position": {"x": 0, "y": 0, "origin": "center", "relativeTo": "canvas_center"},
    "geometry": {"width": 1000, "height": 1000},
    "data": {"title": "Sprint Board", "format": "custom"},
}

STICKY = {
    "id": "3458764600000000002",
    "type": "sticky_note",
    "position": {"x": 100, "y": 100},
    "geometry": {"width": 50, "height": 50},
    "style": {"fillColor": "light_yellow"},
    "data": {"content": "<p>Ship it</p>", "shape": "square"},
}

SHAPE = {
    "id": "3458764600000000003",
    "type": "shape",
    "position": {"x": -200, "y": 150},
    "geometry": {"width": 120, "height": 80},
    "style": {"fillColor": "#ff0000", "borderColor": "#000000", "borderWidth": "2"},
    "data": {"shape": "rectangle", "content": "Box"},
}

TEXT = {
    "id": "3458764600000000004",
    "type": "text",
    "position": {"x": 300, "y": -300},
    "geometry": {"width": 200},
    "data": {"content": "Heading"},
}

IMAGE = {
    "id": "3458764600000000005",
    "type": "image",
    "position": {"x": -300, "y": -300},
    "geometry": {"width": 160, "height": 90},
    "data": {"imageUrl": "https://files.example.com/image/abc", "title": "diagram.png"},
}

NO_POSITION = {
    "id": "3458764600000000006",
    "type": "card",
    "data": {"title": "Floating"},
}

CONNECTOR = {
    "id": "3458764600000000007",
    "type": "connector",
    "startItem": {"id": STICKY["id"]},
    "endItem": {"id": SHAPE["id"]},
}

DANGLING_CONNECTOR = {
    "id": "3458764600000000008",
    "type": "connector",
    "startItem": {"id": STICKY["id"]},
    "endItem": {"id": "9999999999999999999"},
}

FRAME_ITEMS = [STICKY, SHAPE, TEXT, IMAGE, NO_POSITION, CONNECTOR]

BOARDS = [
    {"id": "uXjVOfjkmAk=", "name": "Product roadmap", "description": "Q3 planning"},
    {"id": "uXjVOabcdEf=", "name": "Retro", "description": ""},
]


def single_page(items: list[dict[str, Any]]) -> dict[str | None, tuple[list[dict[str, Any]], str | None]]:
    return {None: (items, None)}


class FakeMiroClient:
    """In-memory stand-in for ``MiroClient`` that records every call."""

    page_size = 50

    def __init__(
        self,
        items: list[dict[str, Any]] | None = None,
        pages: dict[str | None, tuple[list[dict[str, Any]], str | None]] | None = None,
        boards: list[dict[str, Any]] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.items = {i["id"]: i for i in items or []}
        self.pages = pages if pages is not None else single_page([])
        self.boards = boards or []
        self.fail_on = fail_on
        self.calls: list[tuple[Any, ...]] = []
        self.created: list[tuple[str, dict[str, Any]]] = []

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise MiroAPIError(
                f"Failed to {name}: 500 Internal Server Error - boom",
                method="GET",
                path="/boards",
                upstream_status=500,
                detail="boom",
            )

    async def get_boards(self) -> list[Board]:
        self.calls.append(("get_boards",))
        self._maybe_fail("get_boards")
        return [Board.model_validate(b) for b in self.boards]

    async def get_item(self, board_id: str, item_id: str) -> Item:
        self.calls.append(("get_item", board_id, item_id))
        self._maybe_fail("get_item")
        if item_id not in self.items:
            raise MiroAPIError(
                f"Failed to get item: 404 Not Found - item {item_id}",
                method="GET",
                path=f"/boards/{board_id}/items/{item_id}",
                upstream_status=404,
            )
        return Item.model_validate(self.items[item_id])

    async def list_items(
        self,
        board_id: str,
        *,
        parent_item_id: str | None = None,
        item_type: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ItemPage:
        self.calls.append(("list_items", board_id, parent_item_id, item_type, cursor))
        self._maybe_fail("list_items")
        data, next_cursor = self.pages[cursor]
        if item_type:
            data = [d for d in data if d.get("type") == item_type]
        return ItemPage(data=[Item.model_validate(d) for d in data], cursor=next_cursor)

    async def create_sticky_note(self, board_id: str, body: dict[str, Any]) -> Item:
        self.calls.append(("create_sticky_note", board_id))
        self.created.append(("sticky_note", body))
        return Item.model_validate({"id": "new-sticky", "type": "sticky_note", **body})

    async def create_embed(self, board_id, url, position=None, geometry=None, mode=None, preview_url=None) -> Item:
        self.calls.append(("create_embed", board_id))
        body = {"data": {"url": url, "mode": mode, "providerName": "YouTube"}, "position": position}
        if geometry:
            body["geometry"] = geometry
        self.created.append(("embed", body))
        return Item.model_validate({"id": "new-embed", "type": "embed", **body})


def mock_client(handler, page_size: int = 50) -> MiroClient:
    """Real ``MiroClient`` over an ``httpx.MockTransport``."""
    return MiroClient("test-token", page_size=page_size, transport=httpx.MockTransport(handler))


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"content-type": "application/json"},
    )


@pytest.fixture
def frame_client() -> FakeMiroClient:
    return FakeMiroClient(items=[FRAME, *FRAME_ITEMS], pages=single_page(FRAME_ITEMS))


@pytest.fixture
def board_client() -> FakeMiroClient:
    return FakeMiroClient(boards=BOARDS)
