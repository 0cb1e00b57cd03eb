"""Boards exposed as readable resources."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Query

from canvasmap.dependencies import get_miro_client
from canvasmap.miro.client import MiroClient
from canvasmap.miro.pagination import fetch_all_items
from canvasmap.models.responses import ResourceContents, ResourceInfo, ResourceListResponse

router = APIRouter()

BOARD_URI_PREFIX = "miro://board/"


def board_id_from_uri(uri: str) -> str:
    if not uri.startswith(BOARD_URI_PREFIX) or not uri[len(BOARD_URI_PREFIX):]:
        raise ValueError(f"Invalid resource URI: {uri}")
    return uri[len(BOARD_URI_PREFIX):]


@router.get("/resources", response_model=ResourceListResponse)
async def list_resources(client: MiroClient = Depends(get_miro_client)) -> ResourceListResponse:
    boards = await client.get_boards()
    return ResourceListResponse(
        resources=[
            ResourceInfo(
                uri=f"{BOARD_URI_PREFIX}{board.id}",
                name=board.name,
                description=board.description or f"Miro board {board.name}",
            )
            for board in boards
        ]
    )


@router.get("/resources/read", response_model=ResourceContents)
async def read_resource(
    uri: str = Query(..., description="Resource URI, e.g. miro://board/{id}"),
    client: MiroClient = Depends(get_miro_client),
) -> ResourceContents:
    board_id = board_id_from_uri(uri)
    items = await fetch_all_items(client, board_id, page_size=client.page_size)
    return ResourceContents(
        uri=uri,
        text=json.dumps([item.to_payload() for item in items], indent=2),
    )
