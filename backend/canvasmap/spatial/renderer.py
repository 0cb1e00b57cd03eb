"""Frame spatial map: geometric payload and visual artifact from one derivation.

Steps:
    1. validate arguments (no network call on bad input)
    2. fetch the frame item and check its type, then any enclosing frames
    3. aggregate every item in the frame
    4. place each item (board-global + frame-relative); connectors by their ends
    5. build the grid overlay and one primitive group per item
    6. emit SVG or PNG over the same frame bounds
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Literal, Protocol

from canvasmap.errors import CanvasMapError, FrameTypeError, SpatialMapError
from canvasmap.miro.pagination import ItemLister, fetch_all_items
from canvasmap.models.items import Item
from canvasmap.models.spatial import FrameBounds, ItemPlacement, SpatialMapResult, VisualArtifact
from canvasmap.spatial import raster, svg
from canvasmap.spatial.encoder import connector_endpoints, encode_items
from canvasmap.spatial.grid import DEFAULT_GRID_DENSITY, build_grid, validate_grid_density
from canvasmap.spatial.transform import frame_bounds, parent_frame_id, place_connector, place_item

logger = logging.getLogger(__name__)

OutputFormat = Literal["svg", "png"]
OUTPUT_FORMATS = ("svg", "png")

# Enclosing frames followed when resolving a nested frame's position
MAX_FRAME_NESTING = 8


class SpatialSource(ItemLister, Protocol):
    async def get_item(self, board_id: str, item_id: str) -> Item: ...


async def build_spatial_map(
    client: SpatialSource,
    board_id: str,
    frame_id: str,
    *,
    include_text: bool = False,
    grid_density: int = DEFAULT_GRID_DENSITY,
    output_format: OutputFormat = "svg",
    page_size: int | None = None,
    raster_max_size: int = raster.DEFAULT_MAX_SIZE,
) -> SpatialMapResult:
    """Build the spatial map for one frame.

    Raises:
        ValueError: missing ids or unknown output format.
        InvalidGridDensityError: density outside [4, 20].
        SpatialMapError: the frame is not a frame, or a remote call failed;
            the underlying error is chained as ``__cause__``.
    """
    if not board_id:
        raise ValueError("board_id is required")
    if not frame_id:
        raise ValueError("frame_id is required")
    density = validate_grid_density(grid_density)
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format {output_format!r}; expected one of {OUTPUT_FORMATS}")

    start = time.perf_counter()

    operation = "fetch frame"
    try:
        frame = await client.get_item(board_id, frame_id)
        if frame.type != "frame":
            raise FrameTypeError(frame_id, frame.type)

        operation = "fetch parent frame"
        parent = await _parent_bounds(client, board_id, frame)

        operation = "list frame items"
        items = await fetch_all_items(
            client, board_id, parent_item_id=frame_id, page_size=page_size
        )
    except CanvasMapError as e:
        raise SpatialMapError(
            f"Failed to generate spatial map for frame {frame_id} on board {board_id} "
            f"({operation}): {e}",
            board_id=board_id,
            frame_id=frame_id,
            operation=operation,
        ) from e

    bounds = frame_bounds(frame, parent)
    placements = place_items(items, bounds)

    grid = build_grid(bounds, density)
    groups, skipped = encode_items(items, placements, include_text=include_text)

    title = frame.display_title
    if output_format == "svg":
        markup = svg.serialize_svg(
            bounds,
            grid.group,
            groups,
            title=title or f"Frame {frame_id}",
        )
        artifact = VisualArtifact(
            media_type=svg.MEDIA_TYPE,
            width=int(round(bounds.width)),
            height=int(round(bounds.height)),
            scale=1.0,
            text=markup,
        )
    else:
        png, canvas = raster.render_png(bounds, grid.group, groups, max_size=raster_max_size)
        artifact = VisualArtifact(
            media_type=raster.MEDIA_TYPE,
            width=canvas.width,
            height=canvas.height,
            scale=canvas.scale,
            data=png,
        )

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Spatial map for frame %s on board %s: %d items, %d connectors skipped, %s in %.0fms",
        frame_id, board_id, len(placements), len(skipped), output_format, elapsed,
    )

    return SpatialMapResult(
        board_id=board_id,
        frame_id=frame_id,
        frame_title=title,
        bounds=bounds,
        items=placements,
        grid_density=density,
        grid=grid.ticks,
        skipped_connectors=skipped,
        include_text=include_text,
        artifact=artifact,
    )


def place_items(items: Sequence[Item], bounds: FrameBounds) -> list[ItemPlacement]:
    """Place every item; connectors take the geometry of their resolved ends."""
    placements = [place_item(item, bounds) for item in items]
    by_id = {p.id: p for p in placements}
    for i, (item, p) in enumerate(zip(items, placements)):
        if not p.is_connector:
            continue
        ends = connector_endpoints(item, by_id)
        if ends is not None:
            placements[i] = place_connector(p, ends[0], ends[1], bounds)
    return placements


async def _parent_bounds(
    client: SpatialSource,
    board_id: str,
    frame: Item,
    depth: int = 0,
) -> FrameBounds | None:
    """Board-global bounds of the frame enclosing ``frame``, if it is nested."""
    parent_id = parent_frame_id(frame)
    if parent_id is None:
        return None
    if depth >= MAX_FRAME_NESTING:
        logger.warning("Frame %s nested deeper than %d levels; position left unresolved", frame.id, MAX_FRAME_NESTING)
        return None
    parent = await client.get_item(board_id, parent_id)
    grandparent = await _parent_bounds(client, board_id, parent, depth + 1)
    return frame_bounds(parent, grandparent)
