"""Tests for the LLM tool adapter."""

from __future__ import annotations

import pytest

from toolschema.errors import DuplicateToolNameError
from toolschema.llm.tools_adapter import tool_to_openai_spec, tools_to_openai_spec
from toolschema.tools.base import ToolCapability


class Database(ToolCapability):
    name = "Database"
    description = "Executes SQL queries."
    callable_methods = ("execute", "describe_tables")

    def execute(self, *, input: str) -> str:  # noqa: A002
        """Run a read-only SQL query.

        @param input the SQL statement
        """
        return input

    def describe_tables(self, *, tables: str = "") -> str:
        """Describe database tables.

        @param tables comma separated table names, all tables when empty
        """
        return tables


class Wikipedia(ToolCapability):
    name = "Wikipedia"
    description = "Searches Wikipedia."

    def execute(self, *, input: str) -> str:  # noqa: A002
        """Look up a Wikipedia summary.

        @param input the search term
        """
        return input


def test_tool_to_openai_spec_builds_function_schemas() -> None:
    """Produce one OpenAI function schema per callable method."""
    spec = tool_to_openai_spec(Database())

    assert spec == [
        {
            "type": "function",
            "function": {
                "name": "Database-execute",
                "description": "Run a read-only SQL query.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "input": {"type": "string", "description": "the SQL statement"},
                    },
                    "required": ["input"],
                },
            },
        },
        {
            "type": "function",
            "function": {
                "name": "Database-describe_tables",
                "description": "Describe database tables.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "tables": {
                            "type": "string",
                            "description": "comma separated table names, all tables when empty",
                        },
                    },
                    "required": [],
                },
            },
        },
    ]


def test_tools_to_openai_spec_concatenates_in_input_order() -> None:
    """Schemas for a validated tool set keep the caller's order."""
    spec = tools_to_openai_spec([Wikipedia(), Database()])

    assert [item["function"]["name"] for item in spec] == [
        "Wikipedia-execute",
        "Database-execute",
        "Database-describe_tables",
    ]


def test_tools_to_openai_spec_validates_names() -> None:
    """Duplicate tool names are rejected before any schema is built."""
    with pytest.raises(DuplicateToolNameError):
        tools_to_openai_spec([Wikipedia(), Wikipedia()])
