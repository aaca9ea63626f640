"""Base class for tools exposed to a function-calling model.

A tool declares its identity as class attributes and documents each callable
method with ``@param`` tags::

    class Weather(ToolCapability):
        name = "Weather"
        description = "Returns the current weather for a city."

        def execute(self, *, city: str) -> str:
            \"\"\"Look up the current weather.

            @param city the city name
            \"\"\"
            ...

``Weather().to_openai_tools()`` then yields one ``Weather-execute`` function.
"""

from __future__ import annotations

from typing import Any, ClassVar

from toolschema.docs.index import DocumentationIndex
from toolschema.errors import ConfigurationError, UnimplementedError
from toolschema.models import MissingDocPolicy, ToolCallSchema, ToolDescriptor, normalize_description
from toolschema.tools.schema_builder import SchemaBuilder


class ToolCapability:
    """A unit of functionality an agent can invoke."""

    name: ClassVar[str]
    description: ClassVar[str] = ""
    callable_methods: ClassVar[tuple[str, ...]] = ("execute",)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "name"):
            cls.name = cls.__name__
        if "description" in cls.__dict__:
            cls.description = normalize_description(cls.description)
        methods = tuple(cls.callable_methods)
        duplicates = sorted({method for method in methods if methods.count(method) > 1})
        if duplicates:
            message = f"{cls.__name__} declares duplicate callable methods: {duplicates}"
            raise ConfigurationError(message)
        missing = [method for method in methods if not callable(getattr(cls, method, None))]
        if missing:
            message = f"{cls.__name__} declares callable methods it does not define: {missing}"
            raise ConfigurationError(message)
        cls.callable_methods = methods

    @classmethod
    def descriptor(cls) -> ToolDescriptor:
        """Return the identity data declared by this tool type."""
        return ToolDescriptor(
            name=cls.name,
            description=cls.description,
            callable_methods=cls.callable_methods,
        )

    @classmethod
    def run(cls, input: str) -> str:  # noqa: A002 - mirrors ``execute``
        """Instantiate the tool with no arguments and execute it."""
        return cls().execute(input=input)

    def describe(self) -> str:
        """Return the normalized tool description."""
        return self.description

    def execute(self, *, input: str) -> str:  # noqa: A002 - public keyword name
        """Execute the tool and return the answer.

        @param input input to the tool
        @return [String] answer
        @raise UnimplementedError when a subclass does not override it
        """
        message = f"{type(self).__name__} must implement `execute(*, input)` returning a string"
        raise UnimplementedError(message)

    def to_call_schemas(self, *, on_missing: MissingDocPolicy = "warn") -> list[ToolCallSchema]:
        """Return one function-call schema per callable method."""
        index = DocumentationIndex.build(type(self))
        return SchemaBuilder(on_missing=on_missing).build(self, index)

    def to_openai_tools(self, *, on_missing: MissingDocPolicy = "warn") -> list[dict[str, Any]]:
        """Return the schemas as plain dicts for an OpenAI ``tools`` argument."""
        return [schema.to_openai() for schema in self.to_call_schemas(on_missing=on_missing)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
