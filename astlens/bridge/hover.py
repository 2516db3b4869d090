"""Translate tree hover events into editor highlight effects."""
from __future__ import annotations

from astlens.core.state import PlaygroundState
from astlens.editor.effects import ClearHighlights, EditorSurface, HighlightRange
from astlens.tree.nodes import NamedObject, NormalizedNode
from astlens.view.renderer import ENTER


class HoverBridge:
    """Highlights the source a hovered node covers.

    Spans are translated through the offset table of the latest committed
    parse, so highlights always refer to the text that produced the tree.
    """

    def __init__(self, state: PlaygroundState, editor: EditorSurface) -> None:
        self.state = state
        self.editor = editor

    def on_hover(self, node: NormalizedNode, event: str) -> None:
        if event != ENTER:
            self.editor.apply_effect(ClearHighlights())
            return

        span = node.span if isinstance(node, NamedObject) else None
        if span is None:
            return

        start, end = self.character_range(span.start, span.end)
        self.editor.apply_effect(HighlightRange(start, end, self.state.highlight_style))

    def character_range(self, start_byte: int, end_byte: int) -> tuple[int, int]:
        # An end past the table (end of file) falls back to the text length.
        return self.state.offsets.translate_span(start_byte, end_byte)

    __call__ = on_hover
