from __future__ import annotations

import json

import pytest

from astlens.core.config import ConfigManager
from astlens.core.errors import MissingHostElement, ParseFailure, TreeTooDeep, UnknownValueKind
from astlens.playground import PlaygroundController

PROGRAM = json.dumps(
    {
        "start": 0,
        "end": 10,
        "data": {
            "program": {
                "body": [
                    {"start": 0, "end": 10, "data": {"variable_declaration": {"kind": "let"}}},
                ],
                "source_type": "module",
            }
        },
    }
)


class FakeHost:
    def __init__(self) -> None:
        self.themes = []
        self.shown = []

    def apply_theme(self, theme) -> None:
        self.themes.append(theme)

    def show_tree(self, root) -> None:
        self.shown.append(root)


class FakeParser:
    def __init__(self, response: str = PROGRAM) -> None:
        self.response = response
        self.error: ParseFailure | None = None
        self.calls: list[str] = []

    def parse_module(self, source: str) -> str:
        self.calls.append(source)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def parser() -> FakeParser:
    return FakeParser()


@pytest.fixture
def controller(qt_app, recording_editor, host, parser):
    recording_editor.text = "let x = 1;"
    return PlaygroundController(recording_editor, host, parser, ConfigManager())


def _collect(signal) -> list:
    received: list = []
    signal.connect(received.append)
    return received


def test_render_cycle_commits_and_shows_tree(controller, host) -> None:
    rendered = _collect(controller.tree_rendered)

    assert controller.render_cycle() is True

    state = controller.state
    assert state.source_text == "let x = 1;"
    assert state.offsets.char_length == len(state.source_text)
    assert state.tree.name == "Program"
    assert host.shown == [state.view.element]
    assert host.themes[-1] is state.tree_theme
    assert rendered == [state.view]


def test_unchanged_text_is_not_parsed_again(controller, parser) -> None:
    controller.render_cycle()
    assert controller.render_cycle() is False

    assert parser.calls == ["let x = 1;"]


def test_empty_text_is_skipped(controller, recording_editor, parser) -> None:
    recording_editor.text = ""

    assert controller.render_cycle() is False
    assert parser.calls == []


def test_parse_failure_keeps_previous_tree(controller, recording_editor, parser, host) -> None:
    failures = _collect(controller.parse_failed)
    controller.render_cycle()
    previous_tree = controller.state.tree
    previous_offsets = controller.state.offsets

    recording_editor.text = "let = ;"
    parser.error = ParseFailure("Unexpected token", line=1, column=5)

    assert controller.render_cycle() is False
    assert controller.state.tree is previous_tree
    assert controller.state.offsets is previous_offsets
    assert controller.state.source_text == "let x = 1;"
    assert controller.state.last_error is parser.error
    assert failures == [parser.error]
    assert len(host.shown) == 1

    # The failing text is not retried until it changes.
    controller.render_cycle()
    assert parser.calls.count("let = ;") == 1


def test_structured_parser_failure_is_reported(controller, parser) -> None:
    failures = _collect(controller.parse_failed)
    parser.response = json.dumps({"message": "Unexpected token", "line": 1, "column": 4})

    controller.render_cycle()

    assert failures[0].line == 1 and failures[0].column == 4


def test_unknown_value_kind_aborts_cycle(controller, monkeypatch, host) -> None:
    errors = _collect(controller.render_failed)
    monkeypatch.setattr("astlens.playground.controller.decode_ast", lambda _text: {"body": [object()]})

    assert controller.render_cycle() is False
    assert isinstance(errors[0], UnknownValueKind)
    assert controller.state.tree is None
    assert host.shown == []


def test_missing_host_aborts_render_until_attached(qt_app, recording_editor, parser) -> None:
    recording_editor.text = "let x = 1;"
    controller = PlaygroundController(recording_editor, None, parser, ConfigManager())
    errors = _collect(controller.render_failed)

    assert controller.render_cycle() is False
    assert isinstance(errors[0], MissingHostElement)
    assert controller.state.tree is not None

    host = FakeHost()
    controller.attach_host(host)
    assert len(host.shown) == 1


def test_missing_parser_is_parse_failure(qt_app, recording_editor, host) -> None:
    recording_editor.text = "let x = 1;"
    controller = PlaygroundController(recording_editor, host, None, ConfigManager())
    failures = _collect(controller.parse_failed)

    assert controller.render_cycle() is False
    assert isinstance(failures[0], ParseFailure)


def test_set_mode_switches_theme_and_rerenders(controller, host) -> None:
    controller.render_cycle()
    first = controller.state.view
    first.view.toggle()

    controller.set_mode("light")

    assert controller.state.mode == "light"
    assert controller.state.highlight_style == "light"
    assert controller.state.tree_theme.name == "tokyo_night_day"
    assert host.themes[-1].name == "tokyo_night_day"
    assert len(host.shown) == 2
    assert controller.state.view is not first
    assert controller.state.view.view.is_open


def test_set_mode_rejects_unknown_mode(controller) -> None:
    with pytest.raises(ValueError):
        controller.set_mode("sepia")


def test_redraw_clears_stale_highlights(controller, recording_editor) -> None:
    controller.render_cycle()

    assert recording_editor.clears == 1


def test_poll_starts_debounce_only_for_new_text(controller, recording_editor) -> None:
    controller.poll()
    assert controller._debounce_timer.isActive()
    controller._debounce_timer.stop()

    controller.render_cycle()
    controller.poll()
    assert not controller._debounce_timer.isActive()


def test_timers_use_configured_intervals(controller) -> None:
    assert controller._poll_timer.interval() == 100
    assert controller._debounce_timer.interval() == 50
    assert controller._debounce_timer.isSingleShot()

    controller.start()
    assert controller.is_running()
    controller.stop()
    assert not controller.is_running()


def _identifier() -> dict:
    return {"start": 0, "end": 1, "data": {"identifier": {"name": "a"}}}


def _binary_chain(depth: int) -> dict:
    node = _identifier()
    for _ in range(depth):
        node = {
            "start": 0,
            "end": 1,
            "data": {"binary_expression": {"left": node, "operator": "+", "right": _identifier()}},
        }
    return node


def test_deeply_nested_expression_renders(qt_app, recording_editor, host) -> None:
    recording_editor.text = "a" + "+a" * 150
    parser = FakeParser(json.dumps(_binary_chain(150)))
    controller = PlaygroundController(recording_editor, host, parser, ConfigManager())

    assert controller.render_cycle() is True
    assert controller.state.tree.name == "BinaryExpression"
    assert host.shown == [controller.state.view.element]


class TooDeepRenderer:
    def render(self, tree, callback=None):
        raise RecursionError("maximum recursion depth exceeded")


def test_render_recursion_keeps_previous_tree(controller, recording_editor, host) -> None:
    errors = _collect(controller.render_failed)
    controller.render_cycle()
    previous_tree = controller.state.tree
    previous_view = controller.state.view

    controller.renderer = TooDeepRenderer()
    recording_editor.text = "let y = 2;"

    assert controller.render_cycle() is False
    assert isinstance(errors[0], TreeTooDeep)
    assert controller.state.tree is previous_tree
    assert controller.state.view is previous_view
    assert controller.state.source_text == "let x = 1;"
    assert len(host.shown) == 1
