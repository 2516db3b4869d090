"""Main window: the source editor beside the AST tree."""
from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QApplication, QMainWindow, QSplitter

from astlens.core.config import ConfigManager
from astlens.core.logging import get_logger
from astlens.core.theme import ThemeManager
from astlens.editor.source_editor import SourceEditor
from astlens.parser.base import Parser
from astlens.playground.controller import PlaygroundController
from astlens.ui.status_bar import PlaygroundStatusBar
from astlens.view.qt_host import TreeHostWidget

logger = get_logger(__name__)


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: ConfigManager,
        theme: ThemeManager,
        parser: Parser | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("AST Lens")
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)
        self.config = config
        self.theme = theme

        self.editor = SourceEditor(self, config=config, theme=theme)
        self.tree_host = TreeHostWidget(self)

        self.splitter = QSplitter(Qt.Horizontal, self)
        self.splitter.setChildrenCollapsible(False)
        self.splitter.addWidget(self.editor)
        self.splitter.addWidget(self.tree_host)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 1)
        total_width = self.width() or 1200
        self.splitter.setSizes([total_width // 2, total_width - total_width // 2])
        self.setCentralWidget(self.splitter)

        self.status = PlaygroundStatusBar()
        self.setStatusBar(self.status)
        self.status.setContentsMargins(4, 0, 12, 0)

        self.controller = PlaygroundController(self.editor, self.tree_host, parser, config, parent=self)
        self.controller.tree_rendered.connect(lambda _tree: self.status.show_parsed())
        self.controller.parse_failed.connect(self.status.show_failure)
        self.controller.render_failed.connect(self.status.show_failure)

        self._build_menus()
        self._apply_mode(self.controller.state.mode)

        initial = config.initial_source()
        if initial:
            self.editor.setPlainText(initial)

    @property
    def mode(self) -> str:
        return self.controller.state.mode

    def _build_menus(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        self.view_menu = menubar.addMenu("View")
        self.light_mode_action = QAction("Light Theme", self)
        self.light_mode_action.setCheckable(True)
        self.light_mode_action.setChecked(self.mode == "light")
        self.light_mode_action.toggled.connect(lambda checked: self.set_mode("light" if checked else "dark"))
        self.view_menu.addAction(self.light_mode_action)

    def set_mode(self, mode: str) -> None:
        if mode == self.mode:
            return
        self.controller.set_mode(mode)
        self._apply_mode(mode)
        logger.info("Switched to %s mode", mode)

    def _apply_mode(self, mode: str) -> None:
        app = QApplication.instance()
        if app is not None:
            self.theme.apply(app, mode)
        self.editor.apply_mode(mode)
        self.tree_host.apply_theme(self.controller.state.tree_theme)
        self.status.show_mode(mode)
        blocked = self.light_mode_action.blockSignals(True)
        self.light_mode_action.setChecked(mode == "light")
        self.light_mode_action.blockSignals(blocked)

    def open_file(self, path: str) -> None:
        target = Path(path)
        self.editor.setPlainText(target.read_text(encoding="utf-8"))
        self.status.show_path(str(target))
        logger.info("Opened file: %s", target)

    def start(self) -> None:
        self.controller.start()
        self.controller.render_cycle()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.controller.stop()
        super().closeEvent(event)
