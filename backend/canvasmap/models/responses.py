"""API response models."""

from __future__ import annotations

import base64
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    commands_registered: int = 0


class ContentPart(BaseModel):
    type: Literal["text", "json", "image", "svg"]
    text: str | None = None
    data: Any = None
    mime_type: str | None = Field(default=None, serialization_alias="mimeType")


class CommandResult(BaseModel):
    content: list[ContentPart] = Field(default_factory=list)

    @classmethod
    def from_text(cls, *lines: str) -> CommandResult:
        return cls(content=[ContentPart(type="text", text=line) for line in lines])

    def add_text(self, text: str) -> CommandResult:
        self.content.append(ContentPart(type="text", text=text))
        return self

    def add_json(self, data: Any) -> CommandResult:
        self.content.append(ContentPart(type="json", data=data, mime_type="application/json"))
        return self

    def add_image(self, raw: bytes, mime_type: str) -> CommandResult:
        encoded = base64.b64encode(raw).decode("ascii")
        self.content.append(ContentPart(type="image", data=encoded, mime_type=mime_type))
        return self

    def add_svg(self, markup: str) -> CommandResult:
        self.content.append(ContentPart(type="svg", text=markup, mime_type="image/svg+xml"))
        return self


class CommandInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    group: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class CommandListResponse(BaseModel):
    commands: list[CommandInfo] = Field(default_factory=list)


class ResourceInfo(BaseModel):
    uri: str
    name: str
    mime_type: str = Field(default="application/json", serialization_alias="mimeType")
    description: str = ""


class ResourceListResponse(BaseModel):
    resources: list[ResourceInfo] = Field(default_factory=list)


class ResourceContents(BaseModel):
    uri: str
    mime_type: str = Field(default="application/json", serialization_alias="mimeType")
    text: str


class ErrorResponse(BaseModel):
    error: str
    detail: str
