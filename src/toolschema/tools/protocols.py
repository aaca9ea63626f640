"""Protocols describing the tool interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from toolschema.models import MissingDocPolicy, ToolCallSchema, ToolDescriptor


@runtime_checkable
class Tool(Protocol):
    """Protocol representing a capability an agent can call."""

    name: str
    description: str
    callable_methods: tuple[str, ...]

    def execute(self, *, input: str) -> str:  # noqa: A002 - public keyword name
        """Execute the tool and return its answer."""

        ...

    def descriptor(self) -> ToolDescriptor:
        """Return the declared name, description and callable methods."""

        ...

    def describe(self) -> str:
        """Return a human-readable description of the tool."""

        ...

    def to_call_schemas(self, *, on_missing: MissingDocPolicy = "warn") -> list[ToolCallSchema]:
        """Return one function-call schema per callable method."""

        ...
