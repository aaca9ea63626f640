"""Assemble function-call schemas from reflected signatures and documentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from toolschema.errors import ConfigurationError, DocLookupMissError
from toolschema.models import (
    FunctionSchema,
    MissingDocPolicy,
    ParametersSchema,
    PropertySchema,
    ToolCallSchema,
)
from toolschema.tools.reflection import reflect_parameters

if TYPE_CHECKING:
    from toolschema.docs.index import DocumentationIndex
    from toolschema.tools.protocols import Tool


def function_name(tool_name: str, method_name: str) -> str:
    """Return the ``{tool}-{method}`` name exposed to the model."""
    return f"{tool_name}-{method_name}"


class SchemaBuilder:
    """Build :class:`ToolCallSchema` objects for a tool's callable methods.

    Every parameter is typed ``"string"``. Missing documentation degrades to an
    empty description; ``on_missing`` decides whether that is silent, logged,
    or raised as :class:`DocLookupMissError`.
    """

    def __init__(self, on_missing: MissingDocPolicy = "warn") -> None:
        self.on_missing = on_missing

    def build(self, tool: Tool, index: DocumentationIndex) -> list[ToolCallSchema]:
        """Return one schema per entry of ``tool.callable_methods``, in order."""
        return [self.build_method(tool, index, method_name) for method_name in tool.callable_methods]

    def build_method(self, tool: Tool, index: DocumentationIndex, method_name: str) -> ToolCallSchema:
        """Return the schema for a single callable method of ``tool``."""
        method = getattr(tool, method_name, None)
        if method is None or not callable(method):
            message = f"{tool.name} declares callable method {method_name!r} but does not define it"
            raise ConfigurationError(message)

        properties: dict[str, PropertySchema] = {}
        required: list[str] = []
        for spec in reflect_parameters(method):
            description = spec.description
            if not description:
                tag = index.find_param_tag(method_name, spec.name)
                if tag is None:
                    self._missing(tool.name, method_name, spec.name)
                else:
                    description = tag.text
            properties[spec.name] = PropertySchema(type=spec.type, description=description)
            if spec.kind == "required_keyword":
                required.append(spec.name)

        doc = index.find_method_doc(method_name)
        if doc is None:
            self._missing(tool.name, method_name)

        return ToolCallSchema(
            function=FunctionSchema(
                name=function_name(tool.name, method_name),
                description=doc.docstring if doc is not None else "",
                parameters=ParametersSchema(properties=properties, required=required),
            ),
        )

    def _missing(self, tool_name: str, method_name: str, parameter: str | None = None) -> None:
        if self.on_missing == "error":
            raise DocLookupMissError(tool_name, method_name, parameter)
        if self.on_missing == "warn":
            log = structlog.get_logger(__name__)
            log.warning("doc-lookup-miss", tool=tool_name, method=method_name, parameter=parameter)
