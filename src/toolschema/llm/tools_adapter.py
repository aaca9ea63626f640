"""Adapters for exposing tools to LLM function calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from toolschema.tools.registry import validate_tools

if TYPE_CHECKING:
    from collections.abc import Iterable

    from toolschema.models import MissingDocPolicy
    from toolschema.tools.protocols import Tool


def tool_to_openai_spec(tool: Tool, *, on_missing: MissingDocPolicy = "warn") -> list[dict[str, Any]]:
    """Convert a tool into OpenAI function tool schemas, one per callable method."""
    return [schema.to_openai() for schema in tool.to_call_schemas(on_missing=on_missing)]


def tools_to_openai_spec(tools: Iterable[Tool], *, on_missing: MissingDocPolicy = "warn") -> list[dict[str, Any]]:
    """Validate a tool set and return the concatenated schemas in input order."""
    tool_list = list(tools)
    validate_tools(tool_list)
    return [spec for tool in tool_list for spec in tool_to_openai_spec(tool, on_missing=on_missing)]
