"""Signature reflection for callable tool methods."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, TypeVar

from toolschema.models import ParameterKind, ParameterSpec

if TYPE_CHECKING:
    from collections.abc import Callable

F = TypeVar("F", bound="Callable[..., Any]")

PARAM_DOCS_ATTR = "__tool_param_docs__"

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def param_docs(**descriptions: str) -> Callable[[F], F]:
    """Attach parameter descriptions to a tool method.

    Declared descriptions take precedence over ``@param`` tags parsed from the
    method docstring::

        @param_docs(city="The city to look up.")
        def execute(self, *, city: str) -> str: ...
    """

    def decorator(func: F) -> F:
        existing: dict[str, str] = dict(getattr(func, PARAM_DOCS_ATTR, {}))
        existing.update(descriptions)
        setattr(func, PARAM_DOCS_ATTR, existing)
        return func

    return decorator


def declared_param_docs(method: Callable[..., Any]) -> dict[str, str]:
    """Return descriptions declared with :func:`param_docs`, if any."""
    func = getattr(method, "__func__", method)
    return dict(getattr(func, PARAM_DOCS_ATTR, {}))


def classify(parameter: inspect.Parameter) -> ParameterKind:
    """Map an :class:`inspect.Parameter` onto a :data:`ParameterKind`."""
    has_default = parameter.default is not inspect.Parameter.empty
    if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
        return "optional_keyword" if has_default else "required_keyword"
    if parameter.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD and has_default:
        return "optional_keyword"
    return "positional"


def reflect_parameters(method: Callable[..., Any]) -> list[ParameterSpec]:
    """Return the named parameters of ``method`` in declaration order.

    Bound methods omit ``self``. ``*args`` and ``**kwargs`` have no fixed name
    and are skipped.
    """
    declared = declared_param_docs(method)
    specs: list[ParameterSpec] = []
    for name, parameter in inspect.signature(method).parameters.items():
        if parameter.kind in _VARIADIC:
            continue
        specs.append(
            ParameterSpec(
                name=name,
                kind=classify(parameter),
                description=declared.get(name, ""),
            ),
        )
    return specs
