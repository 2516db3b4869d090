"""Source-side helpers: offset translation, editor effects and the editor widget."""

from astlens.editor.effects import ClearHighlights, EditorEffect, EditorSurface, HighlightRange
from astlens.editor.offsets import SPAN_CONVENTION, OffsetTable, build_offset_table

__all__ = [
    "ClearHighlights",
    "EditorEffect",
    "EditorSurface",
    "HighlightRange",
    "OffsetTable",
    "SPAN_CONVENTION",
    "build_offset_table",
]
