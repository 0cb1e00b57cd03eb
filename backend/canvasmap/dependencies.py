"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from canvasmap.config import settings
from canvasmap.errors import CanvasMapError
from canvasmap.miro.client import MiroClient


def get_settings():
    return settings


def get_miro_client(request: Request) -> MiroClient:
    """The shared client opened by the app lifespan."""
    client = getattr(request.app.state, "miro_client", None)
    if client is None:
        raise CanvasMapError("Miro client is not initialised")
    return client
