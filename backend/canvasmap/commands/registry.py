"""Command registry: every command is a coroutine registered via decorator.

Usage:
    class GetFramesArgs(CommandArgs):
        board_id: str = Field(..., description="ID of the board to get frames from")

    @command(name="get_frames", group=Group.BOARDS, args=GetFramesArgs)
    async def get_frames(client: MiroClient, args: GetFramesArgs) -> CommandResult:
        ...

Adding a new command = one decorated function in a module of this package.
The input schema clients see is generated from the argument model.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from canvasmap.miro.client import MiroClient
    from canvasmap.models.responses import CommandResult

logger = logging.getLogger(__name__)


class Group(str, enum.Enum):
    BOARDS = "boards"
    CONTENT = "content"
    SHAPES = "shapes"
    IMAGES = "images"
    EMBEDS = "embeds"
    EXPORT = "export"
    SPATIAL = "spatial"


class CommandArgs(BaseModel):
    """Base for argument models; clients send camelCase keys (``boardId``)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


Handler = Callable[["MiroClient", Any], Awaitable["CommandResult"]]


@dataclass
class CommandSpec:
    name: str
    group: Group
    fn: Handler
    args_model: type[CommandArgs]
    description: str = ""

    @property
    def input_schema(self) -> dict[str, Any]:
        schema = self.args_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "group": self.group.value,
            "inputSchema": self.input_schema,
        }


class CommandRegistry:
    """String-keyed table of commands."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> None:
        if spec.name in self._commands:
            raise ValueError(f"Duplicate command name: {spec.name}")
        self._commands[spec.name] = spec
        logger.debug("Registered command %s (%s)", spec.name, spec.group.value)

    def get(self, name: str) -> CommandSpec:
        return self._commands[name]

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def get_group(self, group: Group) -> list[CommandSpec]:
        specs = [s for s in self._commands.values() if s.group == group]
        return sorted(specs, key=lambda s: s.name)

    def all(self) -> list[CommandSpec]:
        order = list(Group)
        return sorted(self._commands.values(), key=lambda s: (order.index(s.group), s.name))

    @property
    def count(self) -> int:
        return len(self._commands)


# Module-level singleton
_registry = CommandRegistry()


def get_registry() -> CommandRegistry:
    return _registry


def command(
    *,
    name: str,
    group: Group,
    args: type[CommandArgs],
    description: str = "",
):
    """Decorator to register a command handler."""

    def decorator(fn: Handler) -> Handler:
        spec = CommandSpec(
            name=name,
            group=group,
            fn=fn,
            args_model=args,
            description=description or (fn.__doc__ or "").strip(),
        )
        _registry.register(spec)
        return fn

    return decorator
