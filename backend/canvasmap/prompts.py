"""Guide prompts served alongside the commands."""

from __future__ import annotations

WORKING_WITH_MIRO = "Working with MIRO"

_WORKING_WITH_MIRO_GUIDE = """KEY FACTS ABOUT MIRO BOARDS:

Boards and items
- A board is an infinite canvas. Everything placed on it is an item with an id, a type and usually a position and geometry.
- Item types include frame, shape, sticky_note, text, image, embed, card and connector.
- Frames group items. An item inside a frame has the frame as its parent.

Coordinates
- Positions are the CENTER of the item, not its top-left corner.
- The x axis grows to the right, the y axis grows DOWN.
- Board coordinates are global. Items inside a frame report positions relative to the frame's top-left corner (relativeTo = parent_top_left).
- A frame's position is also its center: its top-left corner is (x - width/2, y - height/2).

Before placing content inside a frame
1. Call get_frames to find the frame id.
2. Call get_frame_spatial_map for that frame. It returns every item's board and frame-relative position and size, plus an SVG or PNG map with a labelled coordinate grid.
3. Choose coordinates from the grid labels; they are frame-relative, with (0, 0) at the frame's top-left corner.

Content
- Sticky notes have a fixed palette of named colours (light_yellow, yellow, orange, light_green, green, dark_green, cyan, light_pink, pink, violet, red, light_blue, blue, dark_blue, gray, black).
- Images keep their aspect ratio: set either width or height, never both.
- create_items_in_bulk accepts at most 20 items per call.
- Listings are paginated with cursors; commands that read a whole frame or board follow every page for you.
"""

_PROMPTS: dict[str, dict[str, str]] = {
    WORKING_WITH_MIRO: {
        "description": "Basic prompt for working with MIRO boards",
        "text": _WORKING_WITH_MIRO_GUIDE,
    },
}


def get_all_prompts() -> dict[str, str]:
    """Prompt names mapped to their one-line descriptions."""
    return {name: prompt["description"] for name, prompt in _PROMPTS.items()}


def get_prompt(name: str) -> str:
    """Full prompt text. Raises KeyError for an unknown name."""
    return _PROMPTS[name]["text"]
