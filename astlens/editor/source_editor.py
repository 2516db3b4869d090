"""Source pane: a plain-text editor that accepts highlight effects."""
from __future__ import annotations

from PySide6.QtGui import QColor, QFont, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from astlens.core.config import ConfigManager
from astlens.core.logging import get_logger
from astlens.core.theme import ThemeManager
from astlens.editor.effects import ClearHighlights, EditorEffect, HighlightRange
from astlens.editor.highlighting import JavaScriptHighlighter

logger = get_logger(__name__)


def qt_position(text: str, index: int) -> int:
    """Convert a character index into a Qt (UTF-16 code unit) document position."""

    index = min(max(index, 0), len(text))
    prefix = text[:index]
    # Characters outside the BMP occupy two UTF-16 code units.
    return index + sum(1 for ch in prefix if ord(ch) > 0xFFFF)


class SourceEditor(QPlainTextEdit):
    """JavaScript editor used as the playground's editor surface."""

    def __init__(
        self,
        parent=None,
        *,
        config: ConfigManager | None = None,
        theme: ThemeManager | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("sourceEditor")
        self.config = config
        self.theme = theme or ThemeManager()
        self._highlights: list[QTextEdit.ExtraSelection] = []

        font_cfg = config.section("font") if config else {}
        font_family = font_cfg.get("editor_family", "JetBrains Mono")
        font_size = int(font_cfg.get("editor_size", 11))
        self.setFont(QFont(font_family, font_size))
        self.setTabStopDistance(self.fontMetrics().horizontalAdvance(" " * 2))
        self.setLineWrapMode(QPlainTextEdit.NoWrap)

        self.highlighter = JavaScriptHighlighter(self.document(), self.theme)

    # Editor surface --------------------------------------------------
    def current_text(self) -> str:
        return self.toPlainText()

    def apply_effect(self, effect: EditorEffect) -> None:
        if isinstance(effect, HighlightRange):
            self.highlight_range(effect.start, effect.end, effect.style)
        elif isinstance(effect, ClearHighlights):
            self.clear_highlights()
        else:
            raise TypeError(f"Unsupported editor effect: {effect!r}")

    def highlight_range(self, start: int, end: int, style: str = "dark") -> None:
        """Replace current highlights with the character range ``[start, end)``."""

        text = self.toPlainText()
        cursor = QTextCursor(self.document())
        cursor.setPosition(qt_position(text, start))
        cursor.setPosition(qt_position(text, end), QTextCursor.KeepAnchor)

        selection = QTextEdit.ExtraSelection()
        selection.format.setBackground(self.highlight_color(style))
        selection.cursor = cursor
        self._highlights = [selection]
        self.setExtraSelections(self._highlights)
        logger.debug("Highlighting characters [%d, %d)", start, end)

    def clear_highlights(self) -> None:
        self._highlights = []
        self.setExtraSelections([])

    def highlighted_ranges(self) -> list[tuple[int, int]]:
        """Return the highlighted ranges as Qt document positions."""

        return [
            (selection.cursor.selectionStart(), selection.cursor.selectionEnd())
            for selection in self._highlights
        ]

    def highlight_color(self, style: str) -> QColor:
        return self.theme.highlight_color(style)

    def apply_mode(self, mode: str) -> None:
        """Re-colour the editor for ``dark`` or ``light`` mode."""

        self.theme.set_mode(mode)
        background = self.theme.editor_background().name()
        self.setStyleSheet(f"QPlainTextEdit#sourceEditor {{ background-color: {background}; }}")
        self.highlighter.setDocument(None)
        self.highlighter = JavaScriptHighlighter(self.document(), self.theme)
