"""Async client for the Miro REST API (v2), one coroutine per REST call."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from canvasmap.errors import MiroAPIError
from canvasmap.models.items import Board, BoardPage, Item, ItemPage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_BASE_URL = "https://api.miro.com/v2"

# Remote limits for cursor-paginated listings and bulk creation
MIN_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
MAX_BULK_ITEMS = 20


class MiroClient:
    """Thin wrapper over ``httpx.AsyncClient`` bound to one OAuth token.

    Every failure (transport error or non-2xx status) raises ``MiroAPIError``
    with the method, path and upstream status attached. Nothing is retried here.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        page_size: int = MAX_PAGE_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.page_size = max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, page_size))
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )

    async def __aenter__(self) -> MiroClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Transport ──

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        files: dict[str, Any] | None = None,
        operation: str = "",
    ) -> httpx.Response:
        label = operation or f"{method} {path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            request = self._client.build_request(
                method, path, params=params or None, json=json_body, files=files
            )
            # The bearer token only ever goes to the API host
            if request.url.host != self._client.base_url.host:
                request.headers.pop("Authorization", None)
            response = await self._client.send(request)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            detail = e.response.text
            logger.warning("%s failed: %d %s", label, status, e.response.reason_phrase)
            raise MiroAPIError(
                f"Failed to {label}: {status} {e.response.reason_phrase} - {detail}",
                method=method,
                path=path,
                upstream_status=status,
                detail=detail,
            ) from e
        except httpx.RequestError as e:
            logger.warning("%s failed: %s", label, e)
            raise MiroAPIError(
                f"Failed to {label}: {e.__class__.__name__}: {e}",
                method=method,
                path=path,
            ) from e
        return response

    async def _json(
        self,
        method: str,
        path: str,
        model: type[ModelT] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and decode its body, validated into ``model`` when given.

        An unreadable or unexpected body is an upstream failure, not bad input.
        """
        response = await self._request(method, path, **kwargs)
        label = kwargs.get("operation") or f"{method} {path}"
        try:
            payload = response.json() if response.content else {}
            if model is None:
                return payload
            return model.model_validate(payload)
        except ValueError as e:
            logger.warning("%s returned an unexpected body: %s", label, e)
            raise MiroAPIError(
                f"Failed to {label}: unexpected response body from upstream",
                method=method,
                path=path,
                upstream_status=response.status_code,
                detail=response.text[:500],
            ) from e

    # ── Boards ──

    async def get_boards(self) -> list[Board]:
        page = await self._json("GET", "/boards", BoardPage, operation="list boards")
        return page.data

    # ── Items ──

    async def list_items(
        self,
        board_id: str,
        *,
        parent_item_id: str | None = None,
        item_type: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ItemPage:
        """Fetch one page of items. ``cursor`` on the result is None on the last page."""
        params = {
            "limit": limit or self.page_size,
            "cursor": cursor,
            "type": item_type,
            "parent_item_id": parent_item_id,
        }
        page = await self._json(
            "GET", f"/boards/{board_id}/items", ItemPage, params=params,
            operation="list items",
        )
        if not page.cursor:
            page.cursor = None
        return page

    async def get_item(self, board_id: str, item_id: str) -> Item:
        return await self._json(
            "GET", f"/boards/{board_id}/items/{item_id}", operation="get item",
            model=Item,
        )

    async def delete_item(self, board_id: str, item_id: str) -> None:
        await self._request(
            "DELETE", f"/boards/{board_id}/items/{item_id}", operation="delete item"
        )

    # ── Sticky notes ──

    async def create_sticky_note(self, board_id: str, body: dict[str, Any]) -> Item:
        return await self._json(
            "POST", f"/boards/{board_id}/sticky_notes", json_body=body,
            operation="create sticky note",
            model=Item,
        )

    async def update_sticky_note(self, board_id: str, item_id: str, body: dict[str, Any]) -> Item:
        return await self._json(
            "PATCH", f"/boards/{board_id}/sticky_notes/{item_id}", json_body=body,
            operation="update sticky note",
            model=Item,
        )

    async def delete_sticky_note(self, board_id: str, item_id: str) -> None:
        await self._request(
            "DELETE", f"/boards/{board_id}/sticky_notes/{item_id}",
            operation="delete sticky note",
        )

    async def bulk_create_items(self, board_id: str, items: list[dict[str, Any]]) -> list[Item]:
        if not 1 <= len(items) <= MAX_BULK_ITEMS:
            raise ValueError(f"Bulk create accepts 1 to {MAX_BULK_ITEMS} items, got {len(items)}")
        page = await self._json(
            "POST", f"/boards/{board_id}/items/bulk", json_body=items,
            operation="bulk create items",
            model=ItemPage,
        )
        return page.data

    # ── Shapes ──

    async def create_shape(self, board_id: str, body: dict[str, Any]) -> Item:
        return await self._json(
            "POST", f"/boards/{board_id}/shapes", json_body=body, operation="create shape",
            model=Item,
        )

    # ── Images ──

    async def create_image_by_url(
        self,
        board_id: str,
        image_url: str,
        position: dict[str, Any] | None = None,
        geometry: dict[str, Any] | None = None,
    ) -> Item:
        body: dict[str, Any] = {"data": {"url": image_url}}
        if position:
            body["position"] = position
        if geometry:
            body["geometry"] = geometry
        return await self._json(
            "POST", f"/boards/{board_id}/images", json_body=body,
            operation="create image by URL",
            model=Item,
        )

    async def create_image_by_file(
        self,
        board_id: str,
        file: bytes,
        position: dict[str, Any] | None = None,
        geometry: dict[str, Any] | None = None,
        content_type: str = "image/png",
    ) -> Item:
        meta: dict[str, Any] = {}
        if position:
            meta["position"] = position
        if geometry:
            meta["geometry"] = geometry
        files = {
            "data": (None, json.dumps(meta).encode(), "application/json"),
            "resource": ("image.png", file, content_type),
        }
        return await self._json(
            "POST", f"/boards/{board_id}/images", files=files,
            operation="create image from file",
            model=Item,
        )

    async def create_image_by_base64(
        self,
        board_id: str,
        base64_data: str,
        position: dict[str, Any] | None = None,
        geometry: dict[str, Any] | None = None,
    ) -> Item:
        content_type = "image/png"
        encoded = base64_data
        if ";base64," in base64_data:
            header, encoded = base64_data.split(";base64,", 1)
            if header.startswith("data:"):
                content_type = header[len("data:"):] or content_type
        try:
            raw = base64.b64decode(encoded, validate=True)
        except ValueError as e:
            raise ValueError(f"Failed to create image from base64: {e}") from e
        return await self.create_image_by_file(board_id, raw, position, geometry, content_type)

    # ── Embeds ──

    async def create_embed(
        self,
        board_id: str,
        url: str,
        position: dict[str, Any] | None = None,
        geometry: dict[str, Any] | None = None,
        mode: str | None = None,
        preview_url: str | None = None,
    ) -> Item:
        data: dict[str, Any] = {"url": url}
        if mode:
            data["mode"] = mode
        if preview_url:
            data["previewUrl"] = preview_url
        body: dict[str, Any] = {"data": data}
        if position:
            body["position"] = position
        if geometry:
            body["geometry"] = geometry
        return await self._json(
            "POST", f"/boards/{board_id}/embeds", json_body=body, operation="create embed",
            model=Item,
        )

    # ── Raw resources ──

    async def download(self, url: str) -> tuple[bytes, str]:
        """Fetch a resource URL handed out by the API. Returns (bytes, content type).

        Off-host URLs (signed CDN links) are fetched without the bearer token.
        """
        response = await self._request("GET", url, operation="download resource")
        content_type = response.headers.get("content-type", "image/png").split(";")[0]
        return response.content, content_type
