"""Tests for per-item visual encoding."""

from __future__ import annotations

import pytest

from canvasmap.models.items import Item, ItemKind
from canvasmap.models.spatial import FrameBounds
from canvasmap.spatial import encoder
from canvasmap.spatial.encoder import connector_endpoints, encode_item, encode_items, resolve_color
from canvasmap.spatial.primitives import LabelPrimitive, LinePrimitive, RectPrimitive
from canvasmap.spatial.transform import place_item
from tests.conftest import (
    CONNECTOR,
    DANGLING_CONNECTOR,
    FRAME,
    FRAME_ITEMS,
    IMAGE,
    NO_POSITION,
    SHAPE,
    STICKY,
    TEXT,
)

BOUNDS = FrameBounds(x=0, y=0, width=1000, height=1000)


def _encode(payloads, include_text=False):
    items = [Item.model_validate(p) for p in payloads]
    placements = [place_item(i, BOUNDS) for i in items]
    return encode_items(items, placements, include_text=include_text)


def _group(payload, include_text=False):
    groups, _ = _encode([payload], include_text)
    return groups[0]


def test_every_kind_has_an_encoding():
    assert set(encoder._ENCODERS) == set(ItemKind)


@pytest.mark.parametrize("type_tag, kind", [
    ("shape", ItemKind.SHAPE),
    ("sticky_note", ItemKind.STICKY_NOTE),
    ("text", ItemKind.TEXT),
    ("image", ItemKind.IMAGE),
    ("frame", ItemKind.FRAME),
    ("connector", ItemKind.CONNECTOR),
    ("card", ItemKind.OTHER),
    ("embed", ItemKind.OTHER),
    (None, ItemKind.OTHER),
])
def test_kind_from_type(type_tag, kind):
    assert ItemKind.from_type(type_tag) is kind


class TestVariants:
    def test_shape(self):
        rect = _group(SHAPE).primitives[0]
        assert isinstance(rect, RectPrimitive)
        assert (rect.fill, rect.stroke, rect.stroke_width) == ("#ff0000", "#000000", 2.0)
        assert (rect.x, rect.y, rect.width, rect.height) == (-260, 110, 120, 80)
        assert rect.dash is None

    def test_sticky_note(self):
        rect = _group(STICKY).primitives[0]
        assert rect.corner_radius == 5.0
        assert rect.fill == "#fff9b1"

    def test_text(self):
        rect = _group(TEXT).primitives[0]
        assert rect.fill is None
        assert rect.stroke == "#cccccc"
        assert rect.dash == (5.0, 5.0)

    def test_image(self):
        prims = _group(IMAGE).primitives
        assert prims[0].fill == "#eeeeff"
        assert [p.text for p in prims if isinstance(p, LabelPrimitive)] == ["[IMAGE]"]

    def test_image_title_with_text(self):
        labels = [p.text for p in _group(IMAGE, include_text=True).primitives if isinstance(p, LabelPrimitive)]
        assert labels == ["[IMAGE]", "diagram.png"]

    def test_frame(self):
        prims = _group(FRAME, include_text=True).primitives
        assert prims[0].stroke == "#0066ff"
        assert prims[0].dash == (10.0, 5.0)
        assert prims[1].text == "[FRAME] Sprint Board"
        assert prims[1].y == -500 + 20

    def test_other(self):
        group = _group(NO_POSITION)
        assert group.kind == "other"
        assert group.primitives[0].dash == (3.0, 3.0)
        assert group.primitives[0].stroke == "#999999"

    def test_text_only_when_requested(self):
        assert not any(isinstance(p, LabelPrimitive) for p in _group(STICKY).primitives)
        labels = [p for p in _group(STICKY, include_text=True).primitives if isinstance(p, LabelPrimitive)]
        assert [label.text for label in labels] == ["Ship it"]
        assert (labels[0].x, labels[0].y) == (100, 100)


class TestConnectors:
    def test_resolved_between_item_centers(self):
        groups, skipped = _encode(FRAME_ITEMS)
        assert skipped == []
        connector = next(g for g in groups if g.item_id == CONNECTOR["id"])
        line = connector.primitives[0]
        assert isinstance(line, LinePrimitive)
        assert (line.x1, line.y1, line.x2, line.y2) == (100, 100, -200, 150)
        assert line.arrow_end

    def test_explicit_coordinates(self):
        group = _group({
            "id": "c",
            "type": "connector",
            "geometry": {"start": {"x": 0, "y": 0}, "end": {"x": 10, "y": 0}},
        })
        line = group.primitives[0]
        assert (line.x1, line.x2) == (0, 10)

    def test_dangling_endpoint_skipped(self):
        groups, skipped = _encode([*FRAME_ITEMS, DANGLING_CONNECTOR])
        assert skipped == [DANGLING_CONNECTOR["id"]]
        assert DANGLING_CONNECTOR["id"] not in {g.item_id for g in groups}
        assert len(groups) == len(FRAME_ITEMS)

    def test_encode_item_returns_none(self):
        item = Item.model_validate(DANGLING_CONNECTOR)
        assert encode_item(item, place_item(item, BOUNDS), {}) is None

    def test_endpoints_shared_with_drawing(self):
        items = [Item.model_validate(p) for p in FRAME_ITEMS]
        placements = {i.id: place_item(i, BOUNDS) for i in items}
        connector = next(i for i in items if i.id == CONNECTOR["id"])
        assert connector_endpoints(connector, placements) == ((100, 100), (-200, 150))
        dangling = Item.model_validate(DANGLING_CONNECTOR)
        assert connector_endpoints(dangling, placements) is None


@pytest.mark.parametrize("value, expected", [
    ("#FF0000", "#ff0000"),
    ("#ff000080", "#ff0000"),
    ("#abc", "#abc"),
    ("light_yellow", "#fff9b1"),
    ("transparent", None),
    ("not-a-color", "#ffffff"),
    (None, "#ffffff"),
    (42, "#ffffff"),
])
def test_resolve_color(value, expected):
    assert resolve_color(value, "#ffffff") == expected
