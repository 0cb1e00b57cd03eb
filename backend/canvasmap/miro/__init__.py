"""Remote canvas API access: HTTP client and cursor aggregation."""

from canvasmap.miro.client import MiroClient
from canvasmap.miro.pagination import fetch_all_items, iter_item_pages

__all__ = ["MiroClient", "fetch_all_items", "iter_item_pages"]
