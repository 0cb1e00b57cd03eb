"""Tests for cursor aggregation."""

from __future__ import annotations

import asyncio

import pytest

from canvasmap.errors import MiroAPIError, PaginationError
from canvasmap.miro.pagination import fetch_all_items, iter_item_pages
from tests.conftest import FakeMiroClient, single_page

A = {"id": "a", "type": "shape"}
B = {"id": "b", "type": "text"}
C = {"id": "c", "type": "sticky_note"}


def test_two_pages_concatenated_in_order():
    client = FakeMiroClient(pages={None: ([A, B], "c1"), "c1": ([C], None)})
    items = asyncio.run(fetch_all_items(client, "board"))
    assert [i.id for i in items] == ["a", "b", "c"]
    assert client.count("list_items") == 2


def test_n_pages_take_n_calls():
    pages = {}
    expected = []
    cursor = None
    for n in range(5):
        page_items = [{"id": f"{n}-{k}", "type": "text"} for k in range(3 if n < 4 else 1)]
        expected.extend(i["id"] for i in page_items)
        next_cursor = f"c{n + 1}" if n < 4 else None
        pages[cursor] = (page_items, next_cursor)
        cursor = next_cursor

    client = FakeMiroClient(pages=pages)
    items = asyncio.run(fetch_all_items(client, "board", page_size=3))
    assert [i.id for i in items] == expected
    assert client.count("list_items") == 5


def test_scope_forwarded():
    client = FakeMiroClient(pages=single_page([A, B]))
    items = asyncio.run(fetch_all_items(client, "board", parent_item_id="frame-1", item_type="shape"))
    assert [i.id for i in items] == ["a"]
    assert client.calls[0] == ("list_items", "board", "frame-1", "shape", None)


def test_empty_board():
    client = FakeMiroClient()
    assert asyncio.run(fetch_all_items(client, "board")) == []
    assert client.count("list_items") == 1


def test_repeated_cursor_is_an_error():
    client = FakeMiroClient(pages={None: ([A], "c1"), "c1": ([B], "c1")})
    with pytest.raises(PaginationError, match="repeated cursor"):
        asyncio.run(fetch_all_items(client, "board"))
    assert client.count("list_items") == 2


def test_failure_propagates():
    client = FakeMiroClient(fail_on="list_items")
    with pytest.raises(MiroAPIError) as exc_info:
        asyncio.run(fetch_all_items(client, "board"))
    assert exc_info.value.upstream_status == 500


def test_board_id_required():
    client = FakeMiroClient()

    async def drain():
        return [page async for page in iter_item_pages(client, "")]

    with pytest.raises(ValueError):
        asyncio.run(drain())
    assert client.calls == []
