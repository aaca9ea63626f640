"""Tests for function-call schema generation."""

from __future__ import annotations

import inspect

import pytest
from structlog.testing import capture_logs

from toolschema.docs.index import DocumentationIndex
from toolschema.errors import ConfigurationError, DocLookupMissError
from toolschema.tools.base import ToolCapability
from toolschema.tools.reflection import param_docs
from toolschema.tools.schema_builder import SchemaBuilder, function_name


class Weather(ToolCapability):
    name = "Weather"
    description = "Gets current weather data\nfor a city.  "

    def execute(self, *, city: str) -> str:  # type: ignore[override]
        """Return the current weather for a city.

        @param city the city name
        """
        return f"Sunny in {city}"


class Search(ToolCapability):
    name = "Search"
    description = "Searches the web."
    callable_methods = ("search", "top_result")

    def search(self, *, query: str, limit: str = "10") -> str:
        """Search the web.

        @param query the search query
        @param limit maximum number of results
        """
        return f"{query}:{limit}"

    def top_result(self, query: str) -> str:
        """Return only the best hit."""
        return query


class Calculator(ToolCapability):
    description = "Evaluates math."

    @param_docs(expression="A math expression such as 2 + 2.")
    def execute(self, *, expression: str) -> str:  # type: ignore[override]
        """Evaluate an expression.

        @param expression overridden by the declared description
        """
        return expression


class Undocumented(ToolCapability):
    name = "Undocumented"
    callable_methods = ("lookup",)

    def lookup(self, *, key: str) -> str:
        return key


def _misses(logs: list[dict[str, object]]) -> list[dict[str, object]]:
    return [entry for entry in logs if entry["event"] == "doc-lookup-miss"]


def test_weather_tool_yields_single_documented_schema() -> None:
    """A single documented method produces exactly one schema."""
    assert Weather().to_openai_tools() == [
        {
            "type": "function",
            "function": {
                "name": "Weather-execute",
                "description": "Return the current weather for a city.",
                "parameters": {
                    "type": "object",
                    "properties": {"city": {"type": "string", "description": "the city name"}},
                    "required": ["city"],
                },
            },
        },
    ]


def test_schemas_follow_callable_method_order() -> None:
    """One schema per callable method, named ``tool-method``, in declaration order."""
    schemas = Search().to_call_schemas()

    assert [schema.name for schema in schemas] == ["Search-search", "Search-top_result"]


def test_required_contains_only_required_keywords() -> None:
    """Defaulted keywords and positional parameters are never required."""
    search, top_result = Search().to_call_schemas(on_missing="ignore")

    assert search.function.parameters.required == ["query"]
    assert top_result.function.parameters.required == []


def test_property_keys_match_declared_parameters() -> None:
    """Properties contain exactly the method's named parameters, in order."""
    tool = Search()

    for schema, method_name in zip(tool.to_call_schemas(on_missing="ignore"), tool.callable_methods):
        declared = list(inspect.signature(getattr(tool, method_name)).parameters)
        assert list(schema.function.parameters.properties) == declared


def test_missing_param_tag_degrades_to_empty_description() -> None:
    """An undocumented parameter gets an empty description and generation succeeds."""
    with capture_logs() as logs:
        _, top_result = Search().to_call_schemas()

    prop = top_result.function.parameters.properties["query"]
    assert prop.description == ""
    assert top_result.function.description == "Return only the best hit."
    assert _misses(logs) == [
        {
            "event": "doc-lookup-miss",
            "log_level": "warning",
            "tool": "Search",
            "method": "top_result",
            "parameter": "query",
        },
    ]


def test_missing_method_doc_degrades_to_empty_description() -> None:
    """Undocumented methods get an empty description."""
    with capture_logs() as logs:
        (schema,) = Undocumented().to_call_schemas()

    assert schema.function.description == ""
    assert schema.function.parameters.properties["key"].description == ""
    assert [entry["parameter"] for entry in _misses(logs)] == ["key", None]


def test_ignore_policy_logs_nothing() -> None:
    """The ``ignore`` policy degrades silently."""
    with capture_logs() as logs:
        Undocumented().to_call_schemas(on_missing="ignore")

    assert _misses(logs) == []


def test_error_policy_raises_on_first_miss() -> None:
    """The ``error`` policy turns a miss into an exception."""
    with pytest.raises(DocLookupMissError) as excinfo:
        Undocumented().to_call_schemas(on_missing="error")

    assert excinfo.value.tool == "Undocumented"
    assert excinfo.value.method == "lookup"
    assert excinfo.value.parameter == "key"


def test_declared_param_docs_take_precedence() -> None:
    """Descriptions from ``param_docs`` override parsed ``@param`` tags."""
    (schema,) = Calculator().to_call_schemas(on_missing="error")

    assert schema.name == "Calculator-execute"
    prop = schema.function.parameters.properties["expression"]
    assert prop.description == "A math expression such as 2 + 2."


def test_build_method_rejects_undefined_method() -> None:
    """Asking for a method the tool does not define is a configuration error."""
    builder = SchemaBuilder()
    tool = Weather()

    with pytest.raises(ConfigurationError, match="does not define"):
        builder.build_method(tool, DocumentationIndex.build(Weather), "forecast")


def test_builder_accepts_prebuilt_index() -> None:
    """``build`` works from an explicitly supplied index."""
    index = DocumentationIndex.build(Weather)

    schemas = SchemaBuilder(on_missing="error").build(Weather(), index)

    assert [schema.name for schema in schemas] == [function_name("Weather", "execute")]
    assert Weather.description == "Gets current weather data for a city."


class Plain(ToolCapability):
    name = "Plain"

    def execute(self, *, input: str) -> str:  # noqa: A002
        return input


def test_undocumented_execute_does_not_inherit_base_docs() -> None:
    """An ``execute`` override without a docstring is a doc miss, not the base's text."""
    with capture_logs() as logs:
        (schema,) = Plain().to_call_schemas()

    assert schema.function.description == ""
    assert schema.function.parameters.properties["input"].description == ""
    assert [entry["parameter"] for entry in _misses(logs)] == ["input", None]


def test_undocumented_execute_fails_under_error_policy() -> None:
    """The ``error`` policy reports an undocumented ``execute`` override."""
    with pytest.raises(DocLookupMissError) as excinfo:
        Plain().to_call_schemas(on_missing="error")

    assert excinfo.value.tool == "Plain"
    assert excinfo.value.method == "execute"
