"""Process-wide playground state, owned by the controller."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from astlens.core.errors import AstLensError
from astlens.core.theme import TreeTheme, tree_theme
from astlens.editor.offsets import OffsetTable, build_offset_table
from astlens.tree.nodes import NormalizedNode

if TYPE_CHECKING:  # pragma: no cover - only used for static analysis
    from astlens.view.renderer import RenderedTree


@dataclass
class PlaygroundState:
    """Single-writer snapshot read by the renderer callback and hover bridge.

    ``source_text``, ``offsets`` and ``tree`` always describe the same parse;
    :meth:`commit` is the only way to replace them.
    """

    mode: str = "dark"
    tree_theme: TreeTheme = field(default_factory=lambda: tree_theme("tokyo_night"))
    source_text: str = ""
    offsets: OffsetTable = field(default_factory=lambda: build_offset_table(""))
    tree: NormalizedNode | None = None
    view: "RenderedTree | None" = None
    last_error: AstLensError | None = None

    @property
    def highlight_style(self) -> str:
        return self.mode

    def commit(self, source_text: str, offsets: OffsetTable, tree: NormalizedNode) -> None:
        if offsets.char_length != len(source_text):
            raise ValueError("offset table was built for a different source text")
        self.source_text = source_text
        self.offsets = offsets
        self.tree = tree
        self.view = None
        self.last_error = None
