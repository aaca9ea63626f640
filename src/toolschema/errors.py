"""Exception hierarchy for schema generation and tool registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ToolSchemaError(Exception):
    """Base class for every error raised by toolschema."""


class ConfigurationError(ToolSchemaError):
    """A tool or tool set is declared in a way that cannot be used."""


class DuplicateToolNameError(ConfigurationError):
    """Two or more tools in one set share a name."""

    def __init__(self, duplicates: Sequence[str]) -> None:
        self.duplicates = list(duplicates)
        names = ", ".join(repr(name) for name in self.duplicates)
        message = f"Either tools are not unique or are conflicting with each other: {names}"
        super().__init__(message)


class UnimplementedError(ToolSchemaError, NotImplementedError):
    """A tool was executed without overriding ``execute``."""


class DocLookupMissError(ToolSchemaError):
    """Documentation for a method or parameter could not be found."""

    def __init__(self, tool: str, method: str, parameter: str | None = None) -> None:
        self.tool = tool
        self.method = method
        self.parameter = parameter
        if parameter is None:
            message = f"no documentation for {tool}-{method}"
        else:
            message = f"no @param documentation for {parameter!r} on {tool}-{method}"
        super().__init__(message)
