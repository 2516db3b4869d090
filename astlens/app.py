"""Application bootstrap for AST Lens."""
from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

from astlens.core.config import ConfigManager
from astlens.core.errors import ParserLoadError
from astlens.core.logging import configure_logging, get_logger
from astlens.core.theme import ThemeManager
from astlens.parser.wasm import WasmParser
from astlens.ui.main_window import MainWindow


class AstLensApplication:
    """Owns application-wide objects and startup sequence."""

    def __init__(self, argv: list[str] | None = None) -> None:
        self.args = self._parse_args(argv)
        configure_logging()
        self.logger = get_logger(__name__)
        self.qt_app = QApplication.instance() or QApplication(sys.argv)
        self._install_exception_hook()
        self.config = ConfigManager()
        self.theme = ThemeManager(self.config.theme_mode())
        self.theme.apply(self.qt_app)
        self.parser_error: str | None = None
        self.parser = self._load_parser()
        self.main_window = MainWindow(self.config, self.theme, self.parser)

    def _parse_args(self, argv: list[str] | None) -> argparse.Namespace:
        parser = argparse.ArgumentParser(description="AST Lens playground")
        parser.add_argument("path", nargs="?", help="Source file to open")
        parser.add_argument("--parser", dest="parser_path", help="WebAssembly parser module to load")
        return parser.parse_args(argv)

    def _load_parser(self) -> WasmParser | None:
        path = Path(self.args.parser_path) if self.args.parser_path else self.config.parser_path()
        if path is None:
            self.parser_error = "No parser module configured"
            self.logger.warning(self.parser_error)
            return None
        try:
            return WasmParser.from_file(path, self.config.parser_export())
        except ParserLoadError as exc:
            self.parser_error = str(exc)
            self.logger.error("%s", exc)
            return None

    def run(self) -> int:
        try:
            if self.args.path:
                self._open_initial_path(self.args.path)
            if self.parser_error:
                self.main_window.status.show_parser_unavailable(self.parser_error)
            self.main_window.show()
            self.main_window.start()
            return self.qt_app.exec()
        except Exception:
            self.logger.exception("Unhandled exception in main loop")
            return 1
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        if self.main_window is not None:
            self.main_window.controller.stop()
            self.main_window.close()
            self.main_window.deleteLater()
            self.main_window = None

    def _open_initial_path(self, path: str) -> None:
        target = Path(path)
        if target.is_file():
            self.main_window.open_file(str(target))
        else:
            self.logger.warning("Ignoring %s: not a file", target)

    # Error handling
    def _install_exception_hook(self) -> None:
        sys.excepthook = self._handle_exception  # type: ignore[assignment]

    def _handle_exception(self, exc_type, exc_value, exc_tb) -> None:  # type: ignore[override]
        """Global exception hook that avoids recursive crashes when formatting fails."""
        try:
            formatted = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
        except RecursionError:
            logging.error("Uncaught exception (formatting failed with RecursionError)")
            return
        except Exception:
            logging.error("Uncaught exception (formatting failed)")
            return

        logging.error("Uncaught exception:\n%s", formatted)
        dialog = QMessageBox()
        dialog.setWindowTitle("Unexpected Error")
        dialog.setIcon(QMessageBox.Critical)
        dialog.setText("An unexpected error occurred. Details have been written to the log file.")
        dialog.setDetailedText(formatted)
        dialog.exec()
