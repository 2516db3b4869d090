from __future__ import annotations

import pytest

from astlens.core.theme import ThemeManager
from astlens.editor.effects import ClearHighlights, HighlightRange
from astlens.editor.source_editor import SourceEditor, qt_position


def test_qt_position_counts_astral_characters_twice() -> None:
    text = "😀 = x;"

    assert qt_position(text, 0) == 0
    assert qt_position(text, 1) == 2
    assert qt_position("€ = x;", 4) == 4


def test_highlight_range_selects_characters(qt_app) -> None:
    editor = SourceEditor()
    editor.setPlainText("€ = x;")

    editor.apply_effect(HighlightRange(4, 5))

    assert editor.highlighted_ranges() == [(4, 5)]
    assert len(editor.extraSelections()) == 1


def test_highlight_range_converts_to_utf16(qt_app) -> None:
    editor = SourceEditor()
    editor.setPlainText("😀 = x;")

    editor.apply_effect(HighlightRange(4, 5))

    assert editor.highlighted_ranges() == [(5, 6)]


def test_new_highlight_replaces_previous(qt_app) -> None:
    editor = SourceEditor()
    editor.setPlainText("let x = 1;")

    editor.apply_effect(HighlightRange(0, 3))
    editor.apply_effect(HighlightRange(4, 5))

    assert editor.highlighted_ranges() == [(4, 5)]


def test_clear_highlights(qt_app) -> None:
    editor = SourceEditor()
    editor.setPlainText("let x = 1;")
    editor.apply_effect(HighlightRange(0, 3))

    editor.apply_effect(ClearHighlights())

    assert editor.highlighted_ranges() == []
    assert editor.extraSelections() == []


def test_unknown_effect_is_rejected(qt_app) -> None:
    with pytest.raises(TypeError):
        SourceEditor().apply_effect(object())  # type: ignore[arg-type]


def test_current_text_reads_document(qt_app) -> None:
    editor = SourceEditor()
    editor.setPlainText("const a = 1;")

    assert editor.current_text() == "const a = 1;"


def test_highlight_color_follows_style(qt_app) -> None:
    editor = SourceEditor()

    assert editor.highlight_color("light").green() == 240
    assert editor.highlight_color("dark").green() == 250


def test_apply_mode_recolours_with_shared_theme(qt_app) -> None:
    theme = ThemeManager("dark")
    editor = SourceEditor(theme=theme)

    editor.apply_mode("light")

    assert theme.mode == "light"
    assert editor.highlighter.theme is theme
    assert theme.syntax_color("keyword").name() == "#9854f1"
