"""Status bar for the AST playground."""
from __future__ import annotations

from PySide6.QtWidgets import QLabel, QStatusBar

from astlens.core.errors import AstLensError, ParseFailure


class PlaygroundStatusBar(QStatusBar):
    def __init__(self) -> None:
        super().__init__()
        self.parse_label = QLabel("Parser: Waiting")
        self.parse_label.setContentsMargins(0, 0, 8, 0)
        self.mode_label = QLabel("")
        self.path_label = QLabel("")
        self.addPermanentWidget(self.parse_label)
        self.addPermanentWidget(self.mode_label)
        self.addPermanentWidget(self.path_label)

    def show_path(self, path: str) -> None:
        self.path_label.setText(path)

    def show_message(self, message: str) -> None:  # type: ignore[override]
        super().showMessage(message, 3000)

    def show_mode(self, mode: str) -> None:
        self.mode_label.setText(f"Theme: {mode.capitalize()}")

    def show_parsed(self) -> None:
        self.parse_label.setText("Parser: OK")
        self.parse_label.setToolTip("")

    def show_failure(self, error: AstLensError) -> None:
        """Render a parse or render failure, with its location when known."""

        if isinstance(error, ParseFailure) and error.has_location:
            self.parse_label.setText(f"Parse error at {error.line}:{error.column}")
        elif isinstance(error, ParseFailure):
            self.parse_label.setText("Parse error")
        else:
            self.parse_label.setText("Render error")
        self.parse_label.setToolTip(str(error))

    def show_parser_unavailable(self, reason: str) -> None:
        self.parse_label.setText("Parser: Unavailable")
        self.parse_label.setToolTip(reason)
