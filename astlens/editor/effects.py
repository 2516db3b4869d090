"""Effects the core dispatches to the editor surface."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class HighlightRange:
    """Highlight the half-open character range ``[start, end)``."""

    start: int
    end: int
    style: str = "dark"


@dataclass(frozen=True)
class ClearHighlights:
    """Remove every highlight added through :class:`HighlightRange`."""


EditorEffect = Union[HighlightRange, ClearHighlights]


class EditorSurface(Protocol):
    def current_text(self) -> str:
        ...

    def apply_effect(self, effect: EditorEffect) -> None:
        ...
