"""Frame spatial mapping: coordinate transform, visual encoding, grid, emitters."""

from canvasmap.spatial.renderer import build_spatial_map
from canvasmap.spatial.transform import frame_bounds, place_item, to_frame_relative

__all__ = ["build_spatial_map", "frame_bounds", "place_item", "to_frame_relative"]
