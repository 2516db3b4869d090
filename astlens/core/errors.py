"""Failure taxonomy for the parse/normalize/render cycle.

Every error here is recoverable: the controller logs it, keeps whatever tree
is already on screen and tries again on the next poll.
"""
from __future__ import annotations

from typing import Any


class AstLensError(Exception):
    """Base class for playground failures."""


class ParseFailure(AstLensError):
    """The parser rejected the source or could not be driven.

    ``line`` and ``column`` are 1-based when the parser reports a location.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @property
    def has_location(self) -> bool:
        return self.line is not None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line {self.line})"
        return f"{self.message} (line {self.line}, column {self.column})"


class UnknownValueKind(AstLensError):
    """A raw AST value was not null, bool, number, string, array or object."""

    def __init__(self, value: Any, path: str = "") -> None:
        self.value = value
        self.path = path or "/"
        super().__init__(f"Unknown value kind {type(value).__name__!r} at {self.path}")


class MissingHostElement(AstLensError):
    """The container the tree should be drawn into does not exist."""


class ParserLoadError(AstLensError):
    """The parser module could not be loaded or lacks a required export."""


class TreeTooDeep(AstLensError):
    """The normalized tree is nested too deeply for the view to be built."""
