"""Queryable index of method docstrings and ``@param`` tags for a tool type.

Documentation is recovered from the tool's defining source file: every class
in the tool's MRO is located in its module, the module is parsed with
:mod:`ast`, and each method docstring is split into free text and tags::

    def execute(self, *, city: str) -> str:
        \"\"\"Return the current weather.

        @param city the city name
        @return [String] a short forecast
        \"\"\"

The reST form ``:param city: the city name`` is accepted as well, and other
field lists such as ``:returns:`` or ``:rtype:`` become tags of their own.
"""

from __future__ import annotations

import ast
import inspect
import re
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from toolschema.models import MethodDoc, ParamTag

if TYPE_CHECKING:
    from collections.abc import Iterable

_PARAM_TAG = re.compile(
    r"^@param\s+(?:\[(?P<pre_types>[^\]]*)\]\s+)?(?P<name>\w+)"
    r"(?:\s+\[(?P<post_types>[^\]]*)\])?(?:\s+(?P<text>.*))?$",
)
_REST_PARAM_TAG = re.compile(r"^:param\s+(?:[\w\[\], ]+\s+)?(?P<name>\w+):\s*(?P<text>.*)$")
_REST_FIELD = re.compile(r"^:(?P<tag>\w+)(?:\s+[^:]*)?:(?:\s+(?P<text>.*))?$")
_GENERIC_TAG = re.compile(r"^@(?P<tag>\w+)(?:\s+\[(?P<types>[^\]]*)\])?(?:\s+(?P<text>.*))?$")


def method_title(owner: str, method_name: str) -> str:
    """Return the ``Type#method`` key used for method documentation."""
    return f"{owner}#{method_name}"


def _split_types(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_tag_line(line: str) -> ParamTag | None:
    """Parse a single tag line, returning ``None`` for plain text."""
    match = _PARAM_TAG.match(line)
    if match:
        types = _split_types(match.group("pre_types")) or _split_types(match.group("post_types"))
        return ParamTag(
            tag_name="param",
            name=match.group("name"),
            types=types,
            text=(match.group("text") or "").strip(),
        )
    match = _REST_PARAM_TAG.match(line)
    if match:
        return ParamTag(tag_name="param", name=match.group("name"), text=match.group("text").strip())
    match = _REST_FIELD.match(line)
    if match:
        return ParamTag(tag_name=match.group("tag"), text=(match.group("text") or "").strip())
    match = _GENERIC_TAG.match(line)
    if match:
        return ParamTag(
            tag_name=match.group("tag"),
            types=_split_types(match.group("types")),
            text=(match.group("text") or "").strip(),
        )
    return None


def parse_docstring(title: str, text: str) -> MethodDoc:
    """Split a docstring into free text and an ordered list of tags.

    Non-blank lines following a tag continue that tag's text; a blank line or
    the next tag or reST field closes it. Everything before the first tag is
    the docstring.
    """
    body: list[str] = []
    tags: list[ParamTag] = []
    current: ParamTag | None = None

    for raw_line in inspect.cleandoc(text).splitlines():
        line = raw_line.strip()
        tag = _parse_tag_line(line) if line.startswith(("@", ":")) else None
        if tag is not None:
            tags.append(tag)
            current = tag
        elif not line:
            current = None
            if not tags:
                body.append("")
        elif current is not None:
            current.text = f"{current.text} {line}".strip()
        elif not tags:
            body.append(raw_line.rstrip())

    return MethodDoc(title=title, docstring="\n".join(body).strip(), tags=tags)


class _MethodDocCollector(ast.NodeVisitor):
    """Collect method docstrings keyed by ``Qualname#method``."""

    def __init__(self) -> None:
        self.docs: dict[str, MethodDoc] = {}
        self._class_stack: list[str] = []

    def visit_ClassDef(self, node: ast.ClassDef) -> None:  # noqa: N802 - ast visitor API
        self._class_stack.append(node.name)
        owner = ".".join(self._class_stack)
        for child in node.body:
            if isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef)):
                docstring = ast.get_docstring(child, clean=False)
                if docstring is not None:
                    title = method_title(owner, child.name)
                    self.docs[title] = parse_docstring(title, docstring)
            elif isinstance(child, ast.ClassDef):
                self.visit(child)
        self._class_stack.pop()

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:  # noqa: N802 - ast visitor API
        # Classes defined inside functions have ``<locals>`` qualnames and are not indexed.
        return

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:  # noqa: N802 - ast visitor API
        return


class DocumentationIndex:
    """Method and parameter documentation for one tool type."""

    def __init__(self, docs: dict[str, MethodDoc] | None = None, owners: Iterable[str] = ()) -> None:
        self._docs = dict(docs or {})
        self._owners = list(owners)

    @property
    def owners(self) -> list[str]:
        """Owner ids searched by :meth:`find_method_doc`, most derived first."""
        return list(self._owners)

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, title: object) -> bool:
        return title in self._docs

    def titles(self) -> list[str]:
        """Return every indexed ``Type#method`` title."""
        return list(self._docs)

    @classmethod
    def build(cls, tool_type: type) -> DocumentationIndex:
        """Parse the documentation of ``tool_type`` and its base classes.

        The ``ToolCapability`` base and its own bases are not searched, so a
        tool never inherits the placeholder ``execute`` documentation. Owners
        are keyed by qualname, or by ``module.qualname`` when two classes in
        the MRO share a qualname.
        """
        from toolschema.tools.base import ToolCapability  # noqa: PLC0415 - base imports this module

        classes = [klass for klass in tool_type.__mro__ if klass not in ToolCapability.__mro__]
        qualnames = Counter(klass.__qualname__ for klass in classes)
        docs: dict[str, MethodDoc] = {}
        owners: list[str] = []
        parsed_files: dict[Path, dict[str, MethodDoc] | None] = {}

        for klass in classes:
            owner = klass.__qualname__
            if qualnames[owner] > 1:
                owner = f"{klass.__module__}.{owner}"
            owners.append(owner)
            path = _source_path(klass)
            file_docs: dict[str, MethodDoc] = {}
            if path is not None:
                if path not in parsed_files:
                    parsed_files[path] = _read_and_parse(path)
                file_docs = parsed_files[path] or {}
            prefix = f"{klass.__qualname__}#"
            own = {
                title.split("#", 1)[1]: doc for title, doc in file_docs.items() if title.startswith(prefix)
            }
            if not own:
                # Classes built with type() or nested in functions are absent from the AST.
                own = _runtime_docs(klass)
            for method_name, doc in own.items():
                title = method_title(owner, method_name)
                docs.setdefault(title, doc.model_copy(update={"title": title}))
        return cls(docs, owners=dict.fromkeys(owners))

    @classmethod
    def from_source(cls, source: str, path: str = "<string>") -> DocumentationIndex:
        """Index every method docstring found in a block of Python source."""
        tree = ast.parse(source, filename=path)
        collector = _MethodDocCollector()
        collector.visit(tree)
        owners = dict.fromkeys(title.split("#", 1)[0] for title in collector.docs)
        return cls(collector.docs, owners=owners)

    @classmethod
    def from_path(cls, path: str | Path) -> DocumentationIndex:
        """Index a source file; unreadable or malformed files yield an empty index."""
        docs = _read_and_parse(Path(path)) or {}
        owners = dict.fromkeys(title.split("#", 1)[0] for title in docs)
        return cls(docs, owners=owners)

    def find_method_doc(self, method_name: str) -> MethodDoc | None:
        """Return the documentation for ``method_name`` on the closest owner."""
        for owner in self._owners:
            doc = self._docs.get(method_title(owner, method_name))
            if doc is not None:
                return doc
        return None

    def find_param_tag(self, method_name: str, param_name: str) -> ParamTag | None:
        """Return the ``@param`` tag for ``param_name`` on ``method_name``."""
        doc = self.find_method_doc(method_name)
        if doc is None:
            return None
        return doc.param_tag(param_name)


def _source_path(klass: type) -> Path | None:
    """Return the file defining ``klass`` or ``None`` when it has no source."""
    try:
        filename = inspect.getsourcefile(klass)
    except (TypeError, OSError):
        return None
    if filename is None:
        return None
    return Path(filename)


def _read_and_parse(path: Path) -> dict[str, MethodDoc] | None:
    """Read and parse one source unit, releasing the file on every path."""
    log = structlog.get_logger(__name__)
    try:
        with path.open(encoding="utf-8") as handle:
            tree = ast.parse(handle.read(), filename=str(path))
    except (OSError, SyntaxError, UnicodeDecodeError, ValueError) as exc:
        log.warning("documentation-unavailable", path=str(path), error=str(exc))
        return None
    collector = _MethodDocCollector()
    collector.visit(tree)
    return collector.docs


def _runtime_docs(klass: type) -> dict[str, MethodDoc]:
    """Build method docs from the docstrings attached to ``klass`` at runtime.

    Keys are method names.
    """
    docs: dict[str, MethodDoc] = {}
    for attr_name, attr in vars(klass).items():
        func = attr.__func__ if isinstance(attr, (classmethod, staticmethod)) else attr
        if not inspect.isfunction(func) or not func.__doc__:
            continue
        docs[attr_name] = parse_docstring(method_title(klass.__qualname__, attr_name), func.__doc__)
    return docs
