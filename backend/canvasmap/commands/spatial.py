"""Frame spatial map command."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.config import settings
from canvasmap.miro.client import MiroClient
from canvasmap.models.responses import CommandResult
from canvasmap.spatial.grid import DEFAULT_GRID_DENSITY, MAX_GRID_DENSITY, MIN_GRID_DENSITY
from canvasmap.spatial.renderer import build_spatial_map


class FrameSpatialMapArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board containing the frame")
    frame_id: str = Field(..., min_length=1, description="ID of the frame to analyze")
    include_text: bool = Field(
        False, description="Whether to include text content in the visual representation"
    )
    grid_density: int = Field(
        DEFAULT_GRID_DENSITY,
        ge=MIN_GRID_DENSITY,
        le=MAX_GRID_DENSITY,
        strict=True,
        description="Number of coordinate markers along each axis",
    )
    output_format: Literal["svg", "png"] = Field(
        "svg", description="Visual artifact format: SVG markup or PNG image"
    )


@command(
    name="get_frame_spatial_map",
    group=Group.SPATIAL,
    args=FrameSpatialMapArgs,
    description=(
        "Get a visual map of a frame with a coordinate system for spatial awareness. Returns the "
        "frame bounds, each item's board and frame-relative position and size, and an SVG or PNG "
        "rendering with a labelled coordinate grid in the same coordinate space."
    ),
)
async def get_frame_spatial_map(client: MiroClient, args: FrameSpatialMapArgs) -> CommandResult:
    spatial_map = await build_spatial_map(
        client,
        args.board_id,
        args.frame_id,
        include_text=args.include_text,
        grid_density=args.grid_density,
        output_format=args.output_format,
        page_size=client.page_size,
        raster_max_size=settings.raster_max_size,
    )

    result = CommandResult.from_text(spatial_map.summary())
    result.add_json(spatial_map.geometry_payload())
    artifact = spatial_map.artifact
    if artifact.text is not None:
        result.add_svg(artifact.text)
    elif artifact.data is not None:
        result.add_image(artifact.data, artifact.media_type)
    return result
