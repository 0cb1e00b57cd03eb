"""Cursor aggregation over the item listing endpoint.

The listing call returns at most one page; a ``cursor`` on the response means
more results remain. Pages are fetched strictly one after another (each request
needs the previous cursor) and concatenated in the order the service returned
them.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Protocol

from canvasmap.errors import PaginationError
from canvasmap.models.items import Item, ItemPage

logger = logging.getLogger(__name__)


class ItemLister(Protocol):
    async def list_items(
        self,
        board_id: str,
        *,
        parent_item_id: str | None = None,
        item_type: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ItemPage: ...


async def iter_item_pages(
    client: ItemLister,
    board_id: str,
    *,
    parent_item_id: str | None = None,
    item_type: str | None = None,
    page_size: int | None = None,
) -> AsyncIterator[ItemPage]:
    """Yield every page of a listing until the service stops returning a cursor.

    A cursor the service already handed out is a protocol violation and raises
    ``PaginationError`` instead of looping forever.
    """
    if not board_id:
        raise ValueError("board_id is required")

    cursor: str | None = None
    seen: set[str] = set()
    page_no = 0

    while True:
        page = await client.list_items(
            board_id,
            parent_item_id=parent_item_id,
            item_type=item_type,
            cursor=cursor,
            limit=page_size,
        )
        page_no += 1
        logger.debug(
            "Board %s page %d: %d items (cursor=%s)",
            board_id, page_no, len(page.data), page.cursor,
        )
        yield page

        if not page.cursor:
            return
        if page.cursor in seen:
            raise PaginationError(
                f"Listing items on board {board_id} returned repeated cursor {page.cursor!r} "
                f"after {page_no} pages",
                method="GET",
                path=f"/boards/{board_id}/items",
            )
        seen.add(page.cursor)
        cursor = page.cursor


async def fetch_all_items(
    client: ItemLister,
    board_id: str,
    *,
    parent_item_id: str | None = None,
    item_type: str | None = None,
    page_size: int | None = None,
) -> list[Item]:
    """Complete, ordered item list for a board (or one frame of it)."""
    items: list[Item] = []
    pages = 0
    async for page in iter_item_pages(
        client,
        board_id,
        parent_item_id=parent_item_id,
        item_type=item_type,
        page_size=page_size,
    ):
        items.extend(page.data)
        pages += 1

    logger.info(
        "Fetched %d items from board %s%s in %d pages",
        len(items),
        board_id,
        f" (parent {parent_item_id})" if parent_item_id else "",
        pages,
    )
    return items
