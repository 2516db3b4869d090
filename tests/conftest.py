"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from astlens.editor.effects import ClearHighlights, EditorEffect, HighlightRange  # noqa: E402


@pytest.fixture(scope="session")
def qt_app() -> QApplication:
    """Provide a shared QApplication instance for widget tests."""

    return QApplication.instance() or QApplication([])


class RecordingEditor:
    """Editor surface that records every effect it receives."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.effects: list[EditorEffect] = []

    def current_text(self) -> str:
        return self.text

    def apply_effect(self, effect: EditorEffect) -> None:
        self.effects.append(effect)

    @property
    def last_effect(self) -> EditorEffect | None:
        return self.effects[-1] if self.effects else None

    @property
    def highlights(self) -> list[HighlightRange]:
        return [effect for effect in self.effects if isinstance(effect, HighlightRange)]

    @property
    def clears(self) -> int:
        return sum(1 for effect in self.effects if isinstance(effect, ClearHighlights))


@pytest.fixture
def recording_editor() -> RecordingEditor:
    return RecordingEditor()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point user settings at a temp directory so tests never read real ones."""

    import astlens.core.config as config_mod

    config_root = tmp_path / "config"
    monkeypatch.setattr(config_mod, "CONFIG_DIR", config_root)
    monkeypatch.setattr(config_mod, "USER_SETTINGS_PATH", config_root / "settings.yaml")
    return config_root
