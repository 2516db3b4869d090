"""Display schema produced by the normalizer.

A normalized tree is built from exactly three node kinds. Consumers dispatch
on them with ``isinstance`` and finish with :func:`unreachable` so a new kind
cannot slip through a consumer unnoticed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn, Union

PrimitiveValue = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` of the source a node covers."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def clamp(self, byte_length: int) -> "Span":
        start = min(self.start, byte_length)
        return Span(start, max(start, min(self.end, byte_length)))


@dataclass(frozen=True, eq=False)
class NamedObject:
    """A record. ``name`` is set when the raw node was a single-key wrapper."""

    name: str | None
    fields: tuple[tuple[str, "NormalizedNode"], ...] = ()
    span: Span | None = None

    def field(self, key: str) -> "NormalizedNode":
        for field_key, value in self.fields:
            if field_key == key:
                return value
        raise KeyError(key)

    def keys(self) -> list[str]:
        return [key for key, _ in self.fields]

    def with_name(self, name: str) -> "NamedObject":
        return NamedObject(name, self.fields, self.span)

    def with_span(self, span: Span | None) -> "NamedObject":
        return NamedObject(self.name, self.fields, span)


@dataclass(frozen=True, eq=False)
class ArrayNode:
    items: tuple["NormalizedNode", ...] = ()


@dataclass(frozen=True, eq=False)
class Primitive:
    value: PrimitiveValue

    @property
    def kind(self) -> str:
        # bool first: it is a subclass of int
        if self.value is None:
            return "null"
        if isinstance(self.value, bool):
            return "boolean"
        if isinstance(self.value, (int, float)):
            return "number"
        return "string"


NormalizedNode = Union[NamedObject, ArrayNode, Primitive]


def unreachable(node: object) -> NoReturn:
    raise TypeError(f"Unhandled normalized node kind: {type(node).__name__}")


def to_plain(node: NormalizedNode) -> object:
    """Convert a normalized tree back to plain Python values (for debugging and tests)."""

    if isinstance(node, Primitive):
        return node.value
    if isinstance(node, ArrayNode):
        return [to_plain(item) for item in node.items]
    if isinstance(node, NamedObject):
        plain: dict[str, object] = {}
        if node.name is not None:
            plain["__name"] = node.name
        if node.span is not None:
            plain["__start"] = node.span.start
            plain["__end"] = node.span.end
        for key, value in node.fields:
            plain[key] = to_plain(value)
        return plain
    unreachable(node)
