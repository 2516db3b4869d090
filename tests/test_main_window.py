from __future__ import annotations

import json

from astlens.core.config import ConfigManager
from astlens.core.errors import ParseFailure
from astlens.core.theme import ThemeManager
from astlens.ui.main_window import MainWindow


class ScriptedParser:
    def __init__(self) -> None:
        self.error: ParseFailure | None = None

    def parse_module(self, source: str) -> str:
        if self.error is not None:
            raise self.error
        return json.dumps({"start": 0, "end": len(source.encode("utf-8")), "data": {"program": {"body": []}}})


def test_initial_source_is_parsed_and_shown(qt_app) -> None:
    window = MainWindow(ConfigManager(), ThemeManager(), ScriptedParser())

    assert window.editor.current_text()
    assert window.controller.render_cycle()
    assert window.tree_host.root_element is window.controller.state.view.element
    assert window.status.parse_label.text() == "Parser: OK"


def test_parse_failure_is_shown_with_location(qt_app) -> None:
    parser = ScriptedParser()
    window = MainWindow(ConfigManager(), ThemeManager(), parser)
    parser.error = ParseFailure("Unexpected token", line=2, column=9)

    window.controller.render_cycle()

    assert window.status.parse_label.text() == "Parse error at 2:9"
    assert "Unexpected token" in window.status.parse_label.toolTip()


def test_view_menu_toggles_light_mode(qt_app) -> None:
    window = MainWindow(ConfigManager(), ThemeManager(), ScriptedParser())
    window.controller.render_cycle()

    window.light_mode_action.setChecked(True)

    assert window.mode == "light"
    assert window.controller.state.tree_theme.name == "tokyo_night_day"
    assert window.status.mode_label.text() == "Theme: Light"

    window.light_mode_action.setChecked(False)
    assert window.mode == "dark"
