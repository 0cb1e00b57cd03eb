"""Commands exposed by the server, one module per area."""

from canvasmap.commands.registry import CommandArgs, Group, command, get_registry
from canvasmap.commands.router import dispatch, register_commands

__all__ = ["CommandArgs", "Group", "command", "dispatch", "get_registry", "register_commands"]
