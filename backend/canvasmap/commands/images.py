"""Image creation and retrieval commands."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from canvasmap.commands.registry import CommandArgs, Group, command
from canvasmap.commands.schemas import Origin, position_body
from canvasmap.errors import ItemTypeError
from canvasmap.miro.client import MiroClient
from canvasmap.models.responses import CommandResult


class CreateImageArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board to create the image on")
    image_data: str = Field(
        ...,
        min_length=1,
        description="Image URL, or base64 data with a data URI prefix (data:image/png;base64,...)",
    )
    is_url: bool = Field(True, description="Whether image_data is a URL (true) or base64 data (false)")
    x: float = Field(0, description="X coordinate on the board")
    y: float = Field(0, description="Y coordinate on the board")
    width: float | None = Field(None, gt=0, description="Width of the image (keeps aspect ratio)")
    height: float | None = Field(None, gt=0, description="Height of the image (keeps aspect ratio)")
    origin: Origin = Field("center", description="Origin point for positioning")


class GetImageArgs(CommandArgs):
    board_id: str = Field(..., min_length=1, description="ID of the board containing the image")
    image_id: str = Field(..., min_length=1, description="ID of the image item to fetch")
    format: Literal["url", "original"] = Field("original", description="Desired format of the image")


@command(
    name="create_image",
    group=Group.IMAGES,
    args=CreateImageArgs,
    description="Create an image on a Miro board from a URL or base64 data",
)
async def create_image(client: MiroClient, args: CreateImageArgs) -> CommandResult:
    # Images keep their aspect ratio: width wins over height
    geometry = None
    if args.width is not None:
        geometry = {"width": args.width}
    elif args.height is not None:
        geometry = {"height": args.height}
    position = position_body(args.x, args.y, args.origin)

    if args.is_url:
        image = await client.create_image_by_url(args.board_id, args.image_data, position, geometry)
    else:
        if not args.image_data.startswith("data:image/"):
            raise ValueError(
                "Base64 image data must include data URI scheme prefix (e.g., data:image/png;base64,...)"
            )
        image = await client.create_image_by_base64(args.board_id, args.image_data, position, geometry)

    if image.type != "image":
        raise ItemTypeError(image.id, "image", image.type)

    data = image.data or {}
    return (
        CommandResult.from_text(f"Created image with ID {image.id} on board {args.board_id}")
        .add_json({
            "miroImageId": image.id,
            "boardId": args.board_id,
            "imageUrl": data.get("imageUrl"),
            "dimensions": {
                "width": image.geometry.width if image.geometry else None,
                "height": image.geometry.height if image.geometry else None,
            },
            "requiresAuth": True,
        })
    )


@command(
    name="get_image",
    group=Group.IMAGES,
    args=GetImageArgs,
    description="Get an image item from a board, returned as base64 image content",
)
async def get_image(client: MiroClient, args: GetImageArgs) -> CommandResult:
    image = await client.get_item(args.board_id, args.image_id)
    if image.type != "image":
        raise ItemTypeError(args.image_id, "image", image.type)

    image_url = (image.data or {}).get("imageUrl")
    if not image_url:
        raise ValueError(f"No image URL available for image {args.image_id}")
    if args.format == "original":
        image_url = f"{image_url}{'&' if '?' in image_url else '?'}format=original"

    raw, content_type = await client.download(image_url)
    return (
        CommandResult.from_text(f"Retrieved image {args.image_id} from board {args.board_id}")
        .add_image(raw, content_type)
        .add_json({
            "miroImageId": image.id,
            "dimensions": {
                "width": image.geometry.width if image.geometry else None,
                "height": image.geometry.height if image.geometry else None,
            },
        })
    )
