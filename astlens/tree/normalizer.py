"""Convert raw parser JSON into the normalized display schema.

The parser emits a wrapper-heavy JSON shape. Three rewrites turn it into
:mod:`astlens.tree.nodes`:

* span extraction: ``{"start": s, "end": e, "data": payload}`` becomes the
  normalized payload annotated with ``Span(s, e)``; a payload of the form
  ``{"none": ...}`` collapses the whole node to null.
* wrapper flattening: ``{"variable_declarator": {...}}`` becomes the inner
  record named ``VariableDeclarator``.
* field span hoisting: a field ``key`` whose value is
  ``{"start", "end", "data": {key: inner}}`` keeps ``inner`` under ``key`` and
  attaches the span to it.

Strings are coerced back to booleans and numbers where they look like one.
"""
from __future__ import annotations

import enum
import re
from typing import Any, Generator

from astlens.core.errors import UnknownValueKind
from astlens.core.logging import get_logger
from astlens.tree.nodes import ArrayNode, NamedObject, NormalizedNode, Primitive, Span

logger = get_logger(__name__)

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_SPAN_KEYS = frozenset({"start", "end", "data"})

# One visit step: yields (raw child, path) requests, receives normalized children.
Visit = Generator[tuple[Any, str], NormalizedNode, NormalizedNode]


class RawKind(enum.Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def classify(value: Any, path: str = "/") -> RawKind:
    """Return the JSON kind of ``value`` or raise :class:`UnknownValueKind`."""

    if value is None:
        return RawKind.NULL
    if isinstance(value, bool):
        return RawKind.BOOL
    if isinstance(value, (int, float)):
        return RawKind.NUMBER
    if isinstance(value, str):
        return RawKind.STRING
    if isinstance(value, list):
        return RawKind.ARRAY
    if isinstance(value, dict):
        return RawKind.OBJECT
    raise UnknownValueKind(value, path)


def snake_to_pascal(name: str) -> str:
    """``variable_declarator`` -> ``VariableDeclarator``."""

    return "".join(part[0].upper() + part[1:] for part in name.split("_") if part)


def coerce_string(text: str) -> str | int | float | bool:
    if text == "true":
        return True
    if text == "false":
        return False
    if _NUMBER_RE.fullmatch(text):
        if _INTEGER_RE.fullmatch(text):
            return int(text)
        return float(text)
    return text


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_span_wrapper(raw: dict[str, Any]) -> bool:
    return _is_number(raw.get("start")) and _is_number(raw.get("end")) and "data" in raw


def _is_single_wrapper(raw: dict[str, Any]) -> bool:
    return len(raw) == 1 and isinstance(next(iter(raw.values())), dict)


def _is_hoisted_field(key: str, value: Any) -> bool:
    """A field whose value is a bare span wrapper around ``{key: inner}``."""

    if not isinstance(value, dict) or set(value) != _SPAN_KEYS or not _is_span_wrapper(value):
        return False
    data = value["data"]
    return isinstance(data, dict) and bool(data.get(key))


def _is_null_sentinel(payload: Any) -> bool:
    if payload is None:
        return True
    return isinstance(payload, dict) and bool(payload.get("none"))


def _join(path: str, key: str | int) -> str:
    token = str(key).replace("~", "~0").replace("/", "~1")
    return f"{path.rstrip('/')}/{token}"


class AstNormalizer:
    """Visitor over raw JSON values.

    ``byte_length`` is the encoded length of the source the AST came from.
    When given, spans reaching past it are clamped so every span satisfies
    ``0 <= start <= end <= byte_length``.

    Each visit step is a generator that yields ``(raw, path)`` for every child
    it needs and receives the child's normalized node back. :meth:`normalize`
    drives the steps from an explicit stack, so nesting depth is bounded by
    memory rather than by the interpreter's recursion limit.
    """

    def __init__(self, byte_length: int | None = None) -> None:
        self.byte_length = byte_length

    def normalize(self, raw: Any) -> NormalizedNode:
        stack: list[Visit] = [self._visit(raw, "/")]
        result: NormalizedNode | None = None
        while stack:
            try:
                child_raw, child_path = stack[-1].send(result)
            except StopIteration as done:
                stack.pop()
                result = done.value
                continue
            stack.append(self._visit(child_raw, child_path))
            result = None
        return result

    # Dispatch --------------------------------------------------------
    def _visit(self, raw: Any, path: str) -> Visit:
        kind = classify(raw, path)
        if kind is RawKind.NULL or kind is RawKind.BOOL or kind is RawKind.NUMBER:
            return Primitive(raw)
        if kind is RawKind.STRING:
            return Primitive(coerce_string(raw))
        if kind is RawKind.ARRAY:
            # Nested arrays keep their exact shape, [[x]] included.
            items = []
            for index, item in enumerate(raw):
                items.append((yield item, _join(path, index)))
            return ArrayNode(tuple(items))
        if kind is RawKind.OBJECT:
            return (yield from self._visit_object(raw, path))
        raise UnknownValueKind(raw, path)

    def _visit_object(self, raw: dict[str, Any], path: str) -> Visit:
        if _is_span_wrapper(raw):
            return (yield from self._extract_span(raw, path))
        if _is_single_wrapper(raw):
            return (yield from self._flatten_wrapper(raw, path))
        return (yield from self._visit_fields(raw, path))

    # Passes ----------------------------------------------------------
    def _extract_span(self, raw: dict[str, Any], path: str) -> Visit:
        payload = raw["data"]
        if _is_null_sentinel(payload):
            return Primitive(None)
        inner = yield payload, _join(path, "data")
        return self._attach_span(inner, raw["start"], raw["end"], path)

    def _flatten_wrapper(self, raw: dict[str, Any], path: str) -> Visit:
        (key, value), = raw.items()
        inner = yield value, _join(path, key)
        if not isinstance(inner, NamedObject):
            # A wrapper around a null sentinel or a spanned scalar stays a plain field.
            return NamedObject(None, ((key, inner),))
        return inner.with_name(snake_to_pascal(key))

    def _visit_fields(self, raw: dict[str, Any], path: str) -> Visit:
        fields: list[tuple[str, NormalizedNode]] = []
        for key, value in raw.items():
            child_path = _join(path, key)
            if _is_hoisted_field(key, value):
                inner = yield value["data"][key], _join(_join(child_path, "data"), key)
                fields.append((key, self._attach_span(inner, value["start"], value["end"], child_path)))
            else:
                fields.append((key, (yield value, child_path)))
        return NamedObject(None, tuple(fields))

    def _attach_span(self, node: NormalizedNode, start: float, end: float, path: str) -> NormalizedNode:
        if not isinstance(node, NamedObject):
            logger.debug("Dropping span on non-record node at %s", path)
            return node
        span = Span(max(0, int(start)), max(0, int(end), int(start)))
        if self.byte_length is not None and span.end > self.byte_length:
            logger.debug("Clamping span %s at %s to %d bytes", span, path, self.byte_length)
            span = span.clamp(self.byte_length)
        return node.with_span(span)


def normalize(raw: Any, byte_length: int | None = None) -> NormalizedNode:
    """Normalize one raw AST value."""

    return AstNormalizer(byte_length).normalize(raw)
