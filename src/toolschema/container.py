"""Dependency injection container for toolschema."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from toolschema.errors import ConfigurationError
from toolschema.logger import configure
from toolschema.settings import Settings
from toolschema.tools.base import ToolCapability
from toolschema.tools.registry import ToolRegistry

if TYPE_CHECKING:  # pragma: no cover - typing only
    from structlog.stdlib import BoundLogger
    from toolschema.tools.protocols import Tool
else:  # pragma: no cover - runtime placeholder
    BoundLogger = object


@dataclass
class Container:
    """Aggregates configured application services."""

    settings: Settings
    logger: BoundLogger
    tools: ToolRegistry


def build_container(settings: Settings | None = None) -> Container:
    """Build the dependency container using default settings."""
    resolved_settings = settings or Settings()
    logger = cast("BoundLogger", configure(resolved_settings.log_level, resolved_settings.log_json))

    tools = ToolRegistry()
    tools.extend(load_tool(path) for path in resolved_settings.tools)

    logger.info(
        "boot",
        tools=tools.names(),
        doc_miss_policy=resolved_settings.doc_miss_policy,
    )
    return Container(settings=resolved_settings, logger=logger, tools=tools)


def load_tool(path: str) -> Tool:
    """Import ``package.module:ClassName`` and instantiate it with no arguments.

    The class must derive from ``ToolCapability``.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        message = f"tool path must look like 'package.module:ClassName', got {path!r}"
        raise ConfigurationError(message)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        message = f"cannot import tool module {module_name!r}: {exc}"
        raise ConfigurationError(message) from exc
    try:
        tool_type = getattr(module, attr)
    except AttributeError as exc:
        message = f"module {module_name!r} has no tool {attr!r}"
        raise ConfigurationError(message) from exc
    if not isinstance(tool_type, type) or not issubclass(tool_type, ToolCapability):
        message = f"{path!r} is not a tool class"
        raise ConfigurationError(message)
    try:
        tool = tool_type()
    except TypeError as exc:
        message = f"cannot instantiate tool {path!r} without arguments: {exc}"
        raise ConfigurationError(message) from exc
    return cast("Tool", tool)
