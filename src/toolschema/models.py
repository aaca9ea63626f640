"""Data models for tool identity, parsed documentation and call schemas."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ParameterKind = Literal["required_keyword", "optional_keyword", "positional"]
MissingDocPolicy = Literal["ignore", "warn", "error"]


def normalize_description(value: str) -> str:
    """Collapse newlines to spaces and trim surrounding whitespace."""
    return value.replace("\n", " ").strip()


def _empty_tags() -> list[ParamTag]:
    """Return an empty list for documentation tags."""
    return []


def _empty_properties() -> dict[str, PropertySchema]:
    """Return an empty mapping for schema properties."""
    return {}


class ToolDescriptor(BaseModel):
    """Identity data declared by a tool type."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    callable_methods: tuple[str, ...] = ("execute",)


class ParameterSpec(BaseModel):
    """A single reflected method parameter."""

    name: str
    kind: ParameterKind
    type: Literal["string"] = "string"
    description: str = ""


class ParamTag(BaseModel):
    """One ``@tag`` entry parsed from a method docstring."""

    tag_name: str
    name: str | None = None
    types: list[str] = Field(default_factory=list)
    text: str = ""


class MethodDoc(BaseModel):
    """Parsed documentation for one method, keyed by ``Type#method``."""

    title: str
    docstring: str = ""
    tags: list[ParamTag] = Field(default_factory=_empty_tags)

    def param_tag(self, param_name: str) -> ParamTag | None:
        """Return the ``@param`` tag documenting ``param_name``."""
        for tag in self.tags:
            if tag.tag_name == "param" and tag.name == param_name:
                return tag
        return None


class PropertySchema(BaseModel):
    """JSON schema fragment for a single parameter."""

    model_config = ConfigDict(frozen=True)

    type: Literal["string"] = "string"
    description: str = ""


class ParametersSchema(BaseModel):
    """Object schema describing a function's arguments."""

    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: dict[str, PropertySchema] = Field(default_factory=_empty_properties)
    required: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _required_are_properties(self) -> ParametersSchema:
        unknown = [name for name in self.required if name not in self.properties]
        if unknown:
            message = f"required parameters missing from properties: {unknown}"
            raise ValueError(message)
        return self


class FunctionSchema(BaseModel):
    """Name, description and parameters of one callable function."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    parameters: ParametersSchema = Field(default_factory=ParametersSchema)


class ToolCallSchema(BaseModel):
    """Function-calling descriptor for one tool method."""

    model_config = ConfigDict(frozen=True)

    type: Literal["function"] = "function"
    function: FunctionSchema

    @property
    def name(self) -> str:
        """Return the ``{tool}-{method}`` function name."""
        return self.function.name

    def to_openai(self) -> dict[str, Any]:
        """Return the plain dict accepted by the OpenAI ``tools`` parameter."""
        return self.model_dump()
