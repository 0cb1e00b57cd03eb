"""Name → handler dispatch for commands."""

from __future__ import annotations

import asyncio
import importlib
import logging
import pkgutil
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from canvasmap.commands.registry import CommandRegistry, get_registry
from canvasmap.errors import CommandArgumentError, CommandNotFoundError, CommandTimeoutError

if TYPE_CHECKING:
    from canvasmap.miro.client import MiroClient
    from canvasmap.models.responses import CommandResult

logger = logging.getLogger(__name__)

_NON_COMMAND_MODULES = {"registry", "router", "schemas"}


def register_commands() -> CommandRegistry:
    """Import every command module so the @command decorators fire."""
    import canvasmap.commands as package

    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        if module_name not in _NON_COMMAND_MODULES:
            importlib.import_module(f"{package.__name__}.{module_name}")
    return get_registry()


def _format_validation_error(name: str, exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        problems.append(f"{loc}: {err['msg']}")
    return f"Invalid arguments for {name}: " + "; ".join(problems)


async def dispatch(
    name: str,
    arguments: dict[str, Any] | None,
    client: MiroClient,
    *,
    registry: CommandRegistry | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Validate ``arguments`` against the command's model and run it.

    The optional ``timeout`` bounds the whole command; on expiry the handler is
    cancelled and nothing partial is returned.
    """
    registry = registry or get_registry()
    if name not in registry:
        raise CommandNotFoundError(f"Unknown command: {name}")
    spec = registry.get(name)

    try:
        args = spec.args_model.model_validate(arguments or {})
    except ValidationError as e:
        raise CommandArgumentError(_format_validation_error(name, e)) from e

    start = time.perf_counter()
    try:
        if timeout is not None:
            result = await asyncio.wait_for(spec.fn(client, args), timeout)
        else:
            result = await spec.fn(client, args)
    except asyncio.TimeoutError as e:
        raise CommandTimeoutError(f"{name} did not finish within {timeout:g}s") from e

    logger.info("Command %s completed in %.0fms", name, (time.perf_counter() - start) * 1000)
    return result
