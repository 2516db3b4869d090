"""Controller owning the playground's parse and render cycle.

Text changes are noticed by polling the editor. A change (re)starts a
single-shot debounce timer and the cycle runs once typing pauses. State is
only committed after parsing, normalization and view construction all
succeed, so a failing edit leaves the previous tree, its offsets and its
hover highlights intact.
"""
from __future__ import annotations

from typing import Protocol

from PySide6.QtCore import QObject, QTimer, Signal

from astlens.bridge.hover import HoverBridge
from astlens.core.config import ConfigManager
from astlens.core.errors import AstLensError, MissingHostElement, ParseFailure, TreeTooDeep, UnknownValueKind
from astlens.core.logging import get_logger
from astlens.core.state import PlaygroundState
from astlens.core.theme import TreeTheme, tree_theme
from astlens.editor.effects import ClearHighlights, EditorSurface
from astlens.editor.offsets import build_offset_table
from astlens.parser.base import Parser, decode_ast
from astlens.tree.nodes import NormalizedNode
from astlens.tree.normalizer import AstNormalizer
from astlens.view.elements import Element
from astlens.view.renderer import FullTreeRenderer, RenderedTree, TreeRenderer

logger = get_logger(__name__)


class TreeHost(Protocol):
    """Container the rendered element tree is shown in."""

    def apply_theme(self, theme: TreeTheme) -> None:
        ...

    def show_tree(self, root: Element) -> None:
        ...


class PlaygroundController(QObject):
    tree_rendered = Signal(object)
    parse_failed = Signal(object)
    render_failed = Signal(object)

    def __init__(
        self,
        editor: EditorSurface,
        host: TreeHost | None,
        parser: Parser | None,
        config: ConfigManager | None = None,
        renderer: TreeRenderer | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.editor = editor
        self.host = host
        self.parser = parser
        self.config = config or ConfigManager()
        self.renderer = renderer or FullTreeRenderer()

        mode = self.config.theme_mode()
        self.state = PlaygroundState(mode=mode, tree_theme=tree_theme(self.config.tree_theme_name(mode)))
        self.bridge = HoverBridge(self.state, editor)
        self._last_attempt: str | None = None

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(self.config.poll_interval_ms())
        self._poll_timer.timeout.connect(self.poll)

        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(self.config.debounce_ms())
        self._debounce_timer.timeout.connect(self.render_cycle)

    # Lifecycle -------------------------------------------------------
    def start(self) -> None:
        self._poll_timer.start()
        logger.debug(
            "Polling editor every %d ms (debounce %d ms)",
            self._poll_timer.interval(),
            self._debounce_timer.interval(),
        )

    def stop(self) -> None:
        self._poll_timer.stop()
        self._debounce_timer.stop()

    def is_running(self) -> bool:
        return self._poll_timer.isActive()

    def attach_host(self, host: TreeHost | None) -> None:
        self.host = host
        if host is not None and self.state.tree is not None:
            self.redraw()

    # Cycle -----------------------------------------------------------
    def poll(self) -> None:
        if self.editor.current_text() != self._last_attempt:
            self._debounce_timer.start()

    def render_cycle(self) -> bool:
        """Parse the editor text and redraw the tree. Returns whether a tree was shown."""

        text = self.editor.current_text()
        if not text or text == self._last_attempt:
            return False
        self._last_attempt = text

        offsets = build_offset_table(text)
        try:
            if self.parser is None:
                raise ParseFailure("No parser module is loaded")
            raw = decode_ast(self.parser.parse_module(text))
            tree = AstNormalizer(offsets.byte_length).normalize(raw)
            rendered = self._build(tree)
        except ParseFailure as exc:
            logger.warning("Parse failed: %s", exc)
            self.state.last_error = exc
            self.parse_failed.emit(exc)
            return False
        except (UnknownValueKind, TreeTooDeep) as exc:
            logger.error("Could not build tree from parser output: %s", exc, exc_info=True)
            self._fail(exc)
            return False

        self.state.commit(text, offsets, tree)
        return self._show(rendered)

    def redraw(self) -> bool:
        """Render the committed tree into the host from scratch."""

        if self.state.tree is None:
            return False
        try:
            rendered = self._build(self.state.tree)
        except TreeTooDeep as exc:
            logger.error("%s", exc, exc_info=True)
            self._fail(exc)
            return False
        return self._show(rendered)

    def set_mode(self, mode: str) -> None:
        """Switch between ``dark`` and ``light`` and redraw the current tree."""

        if mode not in {"dark", "light"}:
            raise ValueError(f"Unknown mode: {mode!r}")
        self.state.mode = mode
        self.state.tree_theme = tree_theme(self.config.tree_theme_name(mode))
        if self.host is not None:
            self.host.apply_theme(self.state.tree_theme)
        self.redraw()

    def _require_host(self) -> TreeHost:
        if self.host is None:
            raise MissingHostElement("Tree host is not available; skipping render")
        return self.host

    def _build(self, tree: NormalizedNode) -> RenderedTree:
        try:
            return self.renderer.render(tree, self.bridge.on_hover)
        except RecursionError as exc:
            raise TreeTooDeep("Syntax tree is nested too deeply to render") from exc

    def _show(self, rendered: RenderedTree) -> bool:
        try:
            host = self._require_host()
        except MissingHostElement as exc:
            logger.error("%s", exc)
            self._fail(exc)
            return False

        # Highlights refer to regions of the tree being replaced.
        self.editor.apply_effect(ClearHighlights())
        host.apply_theme(self.state.tree_theme)
        host.show_tree(rendered.element)
        self.state.view = rendered
        logger.debug("Rendered tree for %d characters of source", len(self.state.source_text))
        self.tree_rendered.emit(rendered)
        return True

    def _fail(self, error: AstLensError) -> None:
        self.state.last_error = error
        self.render_failed.emit(error)
