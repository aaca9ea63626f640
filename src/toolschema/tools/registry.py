"""Tool set validation and the name-keyed tool registry."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from toolschema.errors import DuplicateToolNameError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from toolschema.models import MissingDocPolicy
    from toolschema.tools.protocols import Tool


def validate_tools(tools: Iterable[Tool]) -> None:
    """Raise :class:`DuplicateToolNameError` if any two tools share a name."""
    names = [tool.name for tool in tools]
    if len(names) == len(set(names)):
        return
    duplicates = [name for name, count in Counter(names).items() if count > 1]
    raise DuplicateToolNameError(duplicates)


def _empty_registry() -> dict[str, Tool]:
    """Create an empty tool registry."""
    return {}


@dataclass
class ToolRegistry:
    """Registry mapping tool names to tool instances."""

    registry: dict[str, Tool] = field(default_factory=_empty_registry)

    def register(self, tool: Tool) -> None:
        """Register a tool instance under its name."""
        if tool.name in self.registry:
            raise DuplicateToolNameError([tool.name])
        self.registry[tool.name] = tool
        structlog.get_logger(__name__).debug("tool-registered", tool=tool.name)

    def extend(self, tools: Iterable[Tool]) -> None:
        """Validate a batch of tools against itself and the registry, then register it."""
        batch = list(tools)
        validate_tools([*self.registry.values(), *batch])
        for tool in batch:
            self.register(tool)

    def get(self, name: str) -> Tool:
        """Retrieve a tool by name."""
        return self.registry[name]

    def all(self) -> list[Tool]:
        """Return all registered tools."""
        return list(self.registry.values())

    def items(self) -> list[tuple[str, Tool]]:
        """Return ``(name, tool)`` pairs for registered tools."""
        return list(self.registry.items())

    def names(self) -> list[str]:
        """Return registered tool names in registration order."""
        return list(self.registry)

    def __contains__(self, name: object) -> bool:
        return name in self.registry

    def __len__(self) -> int:
        return len(self.registry)

    def to_openai_tools(self, *, on_missing: MissingDocPolicy = "warn") -> list[dict[str, Any]]:
        """Return the schemas of every registered tool, in registration order."""
        return [
            schema.to_openai()
            for tool in self.registry.values()
            for schema in tool.to_call_schemas(on_missing=on_missing)
        ]
