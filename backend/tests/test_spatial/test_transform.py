"""Tests for board-global ↔ frame-relative conversion."""

from __future__ import annotations

import pytest

from canvasmap.models.items import Item
from canvasmap.models.spatial import FrameBounds
from canvasmap.spatial.transform import (
    effective_position,
    effective_size,
    frame_bounds,
    parent_frame_id,
    place_connector,
    place_item,
    to_board_global,
    to_frame_relative,
)
from tests.conftest import FRAME, FRAME_ITEMS, NO_POSITION, STICKY


class TestFrameBounds:
    def test_from_geometry(self):
        bounds = frame_bounds(Item.model_validate(FRAME))
        assert (bounds.left, bounds.top, bounds.right, bounds.bottom) == (-500, -500, 500, 500)

    def test_missing_geometry_defaults(self):
        bounds = frame_bounds(Item.model_validate({"id": "f", "type": "frame", "position": {"x": 10, "y": 20}}))
        assert (bounds.width, bounds.height) == (1000, 1000)
        assert (bounds.left, bounds.top) == (-490, -480)

    def test_zero_dimension_treated_as_missing(self):
        frame = Item.model_validate({"id": "f", "type": "frame", "geometry": {"width": 0, "height": 400}})
        bounds = frame_bounds(frame)
        assert (bounds.width, bounds.height) == (1000, 400)

    def test_nested_frame_shifted_by_parent(self):
        nested = Item.model_validate({
            "id": "inner",
            "type": "frame",
            "position": {"x": 50, "y": 40, "relativeTo": "parent_top_left"},
            "geometry": {"width": 20, "height": 20},
            "parent": {"id": "outer"},
        })
        parent = FrameBounds(x=0, y=0, width=400, height=400)
        assert parent_frame_id(nested) == "outer"
        assert (frame_bounds(nested, parent).x, frame_bounds(nested, parent).y) == (-150, -160)
        # Without the parent the raw position is used
        assert (frame_bounds(nested).x, frame_bounds(nested).y) == (50, 40)

    def test_top_level_frame_has_no_parent(self):
        assert parent_frame_id(Item.model_validate(FRAME)) is None


def test_end_to_end_example():
    bounds = frame_bounds(Item.model_validate(FRAME))
    placement = place_item(Item.model_validate(STICKY), bounds)
    assert (placement.x, placement.y) == (100, 100)
    assert (placement.relative_x, placement.relative_y) == (600, 600)
    assert (placement.width, placement.height) == (50, 50)
    assert (placement.left, placement.top) == (75, 75)


@pytest.mark.parametrize("frame_pos, frame_size", [
    ((0, 0), (1000, 1000)),
    ((2500, -1200), (800, 600)),
    ((-333.5, 10.25), (1920, 1080)),
])
def test_relative_position_independent_of_type(frame_pos, frame_size):
    bounds = FrameBounds(x=frame_pos[0], y=frame_pos[1], width=frame_size[0], height=frame_size[1])
    for payload in FRAME_ITEMS:
        if "position" not in payload:
            continue
        item = Item.model_validate(payload)
        p = place_item(item, bounds)
        expected_x = item.position.x - (frame_pos[0] - frame_size[0] / 2)
        expected_y = item.position.y - (frame_pos[1] - frame_size[1] / 2)
        assert p.relative_x == pytest.approx(expected_x)
        assert p.relative_y == pytest.approx(expected_y)


def test_missing_position_is_origin():
    bounds = FrameBounds(x=200, y=200, width=1000, height=1000)
    item = Item.model_validate(NO_POSITION)
    assert effective_position(item, bounds) == (0.0, 0.0)
    p = place_item(item, bounds)
    assert (p.x, p.y) == (0.0, 0.0)
    assert (p.relative_x, p.relative_y) == (300.0, 300.0)
    assert effective_size(item) == (100.0, 100.0)


def test_parent_relative_position_converted():
    bounds = FrameBounds(x=0, y=0, width=1000, height=1000)
    item = Item.model_validate({
        "id": "child",
        "type": "shape",
        "position": {"x": 10, "y": 20, "relativeTo": "parent_top_left"},
    })
    p = place_item(item, bounds)
    assert (p.x, p.y) == (-490, -480)
    assert (p.relative_x, p.relative_y) == (10, 20)


def test_conversion_round_trip():
    bounds = FrameBounds(x=120, y=-40, width=600, height=300)
    assert to_frame_relative(bounds, -180, -190) == (0, 0)
    assert to_board_global(bounds, *to_frame_relative(bounds, 33, 44)) == (33, 44)


def test_partial_item_geometry():
    item = Item.model_validate({"id": "t", "type": "text", "geometry": {"width": 200}})
    assert effective_size(item) == (200.0, 100.0)


def test_connector_placed_by_endpoints():
    bounds = FrameBounds(x=0, y=0, width=1000, height=1000)
    item = Item.model_validate({"id": "c", "type": "connector"})
    p = place_connector(place_item(item, bounds), (100, 100), (-200, 150), bounds)
    assert (p.x, p.y) == (-50, 125)
    assert (p.width, p.height) == (300, 50)
    assert p.relative_start == (600, 600)
    assert p.relative_end == (300, 650)
    assert p.has_endpoints
