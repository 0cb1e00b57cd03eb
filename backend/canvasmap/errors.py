"""Error types shared by the client, the spatial map pipeline and the command layer.

Upstream failures are wrapped with context and re-raised, never turned into
command output. The API layer maps each class onto an HTTP status.
"""

from __future__ import annotations


class CanvasMapError(Exception):
    """Base error for canvasmap."""

    status_code = 500


class MiroAPIError(CanvasMapError):
    """A call to the remote canvas API failed (network, auth, HTTP status)."""

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        path: str = "",
        upstream_status: int | None = None,
        detail: str = "",
    ) -> None:
        super().__init__(message)
        self.method = method
        self.path = path
        self.upstream_status = upstream_status
        self.detail = detail


class PaginationError(MiroAPIError):
    """The remote service handed back a cursor it had already issued."""


class ItemTypeError(CanvasMapError):
    """An item id resolved to an item of the wrong type."""

    status_code = 422

    def __init__(self, item_id: str, expected_type: str, actual_type: str) -> None:
        super().__init__(f"Item with ID {item_id} is not a {expected_type}, it's a {actual_type}")
        self.item_id = item_id
        self.expected_type = expected_type
        self.actual_type = actual_type


class FrameTypeError(ItemTypeError):
    """The requested frame id resolved to an item that is not a frame."""

    def __init__(self, frame_id: str, actual_type: str) -> None:
        super().__init__(frame_id, "frame", actual_type)

    @property
    def frame_id(self) -> str:
        return self.item_id


class InvalidGridDensityError(CanvasMapError, ValueError):
    """Grid density outside the accepted [4, 20] range."""

    status_code = 422


class SpatialMapError(CanvasMapError):
    """The spatial map pipeline failed; the cause is chained."""

    def __init__(self, message: str, *, board_id: str, frame_id: str, operation: str) -> None:
        super().__init__(message)
        self.board_id = board_id
        self.frame_id = frame_id
        self.operation = operation

    @property
    def status_code(self) -> int:  # type: ignore[override]
        cause = self.__cause__
        if isinstance(cause, CanvasMapError):
            return cause.status_code
        return 500


class CommandNotFoundError(CanvasMapError):
    """Command name isn't registered."""

    status_code = 404


class CommandArgumentError(CanvasMapError):
    """Command arguments failed validation."""

    status_code = 422


class CommandTimeoutError(CanvasMapError):
    """Command exceeded the configured request timeout."""

    status_code = 504
