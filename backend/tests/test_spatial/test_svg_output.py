"""Tests for SVG markup output."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from canvasmap.models.spatial import FrameBounds
from canvasmap.spatial.grid import build_grid
from canvasmap.spatial.primitives import LabelPrimitive, LinePrimitive, PrimitiveGroup, RectPrimitive
from canvasmap.spatial.svg import fmt, primitive_to_svg_dicts, serialize_svg

SVG_NS = "{http://www.w3.org/2000/svg}"
BOUNDS = FrameBounds(x=0, y=0, width=1000, height=1000)


def _parse(markup: str) -> ET.Element:
    return ET.fromstring(markup.encode("utf-8"))


def test_fmt():
    assert fmt(75.0) == "75"
    assert fmt(-0.0) == "0"
    assert fmt(1 / 3) == "0.33"
    assert fmt(12.5) == "12.5"


def test_viewbox_is_frame_bounding_box():
    root = _parse(serialize_svg(FrameBounds(x=200, y=100, width=800, height=600), None, []))
    assert root.get("viewBox") == "-200 -200 800 600"
    assert root.get("width") == "800"


def test_document_order():
    grid = build_grid(BOUNDS, 4)
    item = PrimitiveGroup(
        item_id="42",
        kind="shape",
        primitives=[RectPrimitive(x=75, y=75, width=50, height=50)],
        css_class="item item-shape",
    )
    root = _parse(serialize_svg(BOUNDS, grid.group, [item], title="Frame <1>"))
    assert root.find(f"{SVG_NS}title").text == "Frame <1>"

    groups = root.findall(f"{SVG_NS}g")
    assert [g.get("data-item-id") for g in groups] == ["grid", "42"]
    assert groups[0].get("class") == "coordinate-grid"
    assert groups[1].get("data-kind") == "shape"

    background = root.find(f"{SVG_NS}rect")
    assert background.get("class") == "frame-background"
    assert background.get("opacity") == "0.1"

    rect = groups[1].find(f"{SVG_NS}rect")
    assert (rect.get("x"), rect.get("y"), rect.get("width")) == ("75", "75", "50")


def test_rect_attributes():
    [elem] = primitive_to_svg_dicts(
        RectPrimitive(x=0, y=0, width=10, height=10, fill=None, stroke="#0066ff", dash=(10, 5), corner_radius=5)
    )
    assert elem["fill"] == "none"
    assert elem["stroke-dasharray"] == "10,5"
    assert elem["rx"] == "5"


def test_line_with_arrowhead():
    elems = primitive_to_svg_dicts(LinePrimitive(x1=0, y1=0, x2=100, y2=0, stroke="#333333", arrow_end=True))
    assert [e["tag"] for e in elems] == ["line", "polygon"]
    assert elems[1]["class"] == "arrowhead"
    assert elems[1]["points"] == "100,0 88,5 88,-5"


def test_label_text_escaped():
    root = _parse(serialize_svg(
        BOUNDS,
        None,
        [PrimitiveGroup(item_id="t", kind="text", primitives=[LabelPrimitive(x=0, y=0, text='a < b & "c"')])],
    ))
    text = root.find(f"{SVG_NS}g/{SVG_NS}text")
    assert text.text == 'a < b & "c"'
    assert text.get("dominant-baseline") == "middle"
