"""Tests for command dispatch and argument validation."""

from __future__ import annotations

import asyncio
import base64
import io

import pytest
from PIL import Image

from canvasmap.commands.registry import CommandArgs, CommandRegistry, CommandSpec, Group
from canvasmap.commands.router import dispatch, register_commands
from canvasmap.errors import (
    CommandArgumentError,
    CommandNotFoundError,
    CommandTimeoutError,
    SpatialMapError,
)
from canvasmap.models.responses import CommandResult
from tests.conftest import FRAME, SHAPE, STICKY, FakeMiroClient

BOARD = "uXjVOfjkmAk="

register_commands()


def _run(name, arguments, client, **kwargs):
    return asyncio.run(dispatch(name, arguments, client, **kwargs))


def test_unknown_command():
    with pytest.raises(CommandNotFoundError, match="Unknown command: take_screenshot"):
        _run("take_screenshot", {}, FakeMiroClient())


class TestArgumentValidation:
    @pytest.mark.parametrize("density", [3, 21, "10", 7.5])
    def test_grid_density_rejected_before_network(self, frame_client, density):
        with pytest.raises(CommandArgumentError, match="gridDensity"):
            _run(
                "get_frame_spatial_map",
                {"boardId": BOARD, "frameId": FRAME["id"], "gridDensity": density},
                frame_client,
            )
        assert frame_client.calls == []

    def test_missing_required(self, frame_client):
        with pytest.raises(CommandArgumentError, match="boardId"):
            _run("get_frames", {}, frame_client)

    def test_unknown_argument(self, frame_client):
        with pytest.raises(CommandArgumentError, match="colour"):
            _run("get_frames", {"boardId": BOARD, "colour": "red"}, frame_client)

    def test_bad_output_format(self, frame_client):
        with pytest.raises(CommandArgumentError, match="outputFormat"):
            _run(
                "get_frame_spatial_map",
                {"boardId": BOARD, "frameId": FRAME["id"], "outputFormat": "jpeg"},
                frame_client,
            )

    def test_snake_case_accepted(self, frame_client):
        result = _run("get_frame_spatial_map", {"board_id": BOARD, "frame_id": FRAME["id"]}, frame_client)
        assert result.content[0].type == "text"


def test_timeout_cancels_command():
    class NoArgs(CommandArgs):
        pass

    async def slow(client, args):
        await asyncio.sleep(5)
        return CommandResult.from_text("too late")

    registry = CommandRegistry()
    registry.register(CommandSpec(name="slow", group=Group.BOARDS, fn=slow, args_model=NoArgs))
    with pytest.raises(CommandTimeoutError):
        _run("slow", None, FakeMiroClient(), registry=registry, timeout=0.01)


class TestSpatialMapCommand:
    def test_svg_result(self, frame_client):
        result = _run(
            "get_frame_spatial_map",
            {"boardId": BOARD, "frameId": FRAME["id"], "includeText": True, "gridDensity": 4},
            frame_client,
        )
        assert [part.type for part in result.content] == ["text", "json", "svg"]
        assert result.content[0].text.startswith('Spatial map for frame "Sprint Board"')
        payload = result.content[1].data
        assert payload["gridDensity"] == 4
        assert payload["artifact"]["mediaType"] == "image/svg+xml"
        svg_part = result.content[2]
        assert svg_part.mime_type == "image/svg+xml"
        assert "Ship it" in svg_part.text
        sticky = next(i for i in payload["items"] if i["id"] == STICKY["id"])
        assert sticky["content"] == "Ship it"

    def test_png_result(self, frame_client):
        result = _run(
            "get_frame_spatial_map",
            {"boardId": BOARD, "frameId": FRAME["id"], "outputFormat": "png"},
            frame_client,
        )
        assert [part.type for part in result.content] == ["text", "json", "image"]
        assert all("content" not in item for item in result.content[1].data["items"])
        image_part = result.content[2]
        assert image_part.mime_type == "image/png"
        image = Image.open(io.BytesIO(base64.b64decode(image_part.data)))
        assert image.size == (1000, 1000)

    def test_non_frame(self):
        client = FakeMiroClient(items=[SHAPE])
        with pytest.raises(SpatialMapError, match="it's a shape"):
            _run("get_frame_spatial_map", {"boardId": BOARD, "frameId": SHAPE["id"]}, client)
        assert client.count("list_items") == 0
