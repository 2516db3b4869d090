"""Theme helpers for AST Lens.

Two kinds of theme live here: the Qt palette/editor colours applied to the
whole application, and the tree themes that style AST tokens. Tree themes are
plain data keyed by token class; the view layer turns them into a style sheet.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from PySide6.QtGui import QColor, QFont, QFontDatabase, QPalette
from PySide6.QtWidgets import QApplication

TOKEN_CLASSES = ("string", "number", "boolean", "null", "key", "title")


@dataclass(frozen=True)
class TreeTheme:
    """Style values for each semantic token class of the AST tree."""

    name: str
    background: str
    string: dict[str, str] = field(default_factory=dict)
    number: dict[str, str] = field(default_factory=dict)
    boolean: dict[str, str] = field(default_factory=dict)
    null: dict[str, str] = field(default_factory=dict)
    key: dict[str, str] = field(default_factory=dict)
    title: dict[str, str] = field(default_factory=dict)

    def style_for(self, token_class: str) -> dict[str, str]:
        if token_class == "background":
            return {"background-color": self.background}
        if token_class not in TOKEN_CLASSES:
            raise KeyError(token_class)
        return dict(getattr(self, token_class))


_TREE_THEMES: dict[str, TreeTheme] = {
    theme.name: theme
    for theme in (
        TreeTheme(
            "tokyo_night",
            background="#1a1b26",
            title={"color": "#bb9af7"},
            key={"color": "#7aa2f7"},
            string={"color": "#9ece6a"},
            boolean={"color": "#c0caf5"},
            number={"color": "#ff9e64"},
            null={"color": "#bb9af7"},
        ),
        TreeTheme(
            "tokyo_night_day",
            background="#e1e2e7",
            string={"color": "#587539"},
            number={"color": "#b15c00"},
            boolean={"color": "#3760bf"},
            null={"color": "#007197"},
            key={"color": "#007197"},
            title={"color": "#3760bf"},
        ),
        TreeTheme(
            "espresso",
            background="#ffffff",
            number={"color": "#CF4F5F", "font-weight": "bold"},
            key={"color": "#2F6F9F"},
            boolean={"color": "#CF4F5F"},
            string={"color": "#CF4F5F"},
            null={"color": "#CF4F5F"},
            title={"color": "#CF4F5F"},
        ),
        TreeTheme(
            "barf",
            background="#15191E",
            number={"color": "#C1E1B8"},
            key={"color": "#697A8E"},
            boolean={"color": "#53667D"},
            string={"color": "#5C81B3"},
            null={"color": "#697A8E"},
            title={"color": "#708E67"},
        ),
        TreeTheme(
            "solarized_light",
            background="#fef7e5",
            number={"color": "#D33682"},
            key={"color": "#93A1A1"},
            boolean={"color": "#B58900"},
            string={"color": "#2AA198"},
            null={"color": "#B58900"},
            title={"color": "#859900"},
        ),
        TreeTheme(
            "rose_pine_dawn",
            background="#faf4ed",
            number={"color": "#d7827e"},
            key={"color": "#907aa9"},
            boolean={"color": "#286983"},
            string={"color": "#ea9d34"},
            null={"color": "#FFCC66"},
            title={"color": "#286983"},
        ),
    )
}


def tree_theme(name: str) -> TreeTheme:
    """Return a registered tree theme, raising ``KeyError`` for unknown names."""

    return _TREE_THEMES[name]


def tree_theme_names() -> list[str]:
    return sorted(_TREE_THEMES)


class ThemeManager:
    """Applies and exposes the application palette for dark and light modes."""

    HIGHLIGHT_COLORS = {
        "dark": QColor(255, 250, 112, int(0.2 * 255)),
        "light": QColor(145, 240, 180, int(0.5 * 255)),
    }

    def __init__(self, mode: str = "dark") -> None:
        self.mode = mode
        self._palette = self._build_palette(mode)
        self._syntax_colors = self._default_syntax_colors(mode)

    def apply(self, app: QApplication, mode: str | None = None) -> None:
        """Apply the palette and fonts for ``mode`` to the application."""

        self.set_mode(mode or self.mode)
        app.setStyle("Fusion")
        app.setPalette(self._palette)
        app.setFont(self._preferred_font())

    def set_mode(self, mode: str) -> None:
        """Switch palette and syntax colours to ``mode`` without touching the application."""

        self.mode = mode
        self._palette = self._build_palette(mode)
        self._syntax_colors = self._default_syntax_colors(mode)

    def syntax_color(self, key: str) -> QColor:
        return self._syntax_colors.get(key, QColor(200, 200, 200))

    def highlight_color(self, mode: str | None = None) -> QColor:
        return QColor(self.HIGHLIGHT_COLORS.get(mode or self.mode, self.HIGHLIGHT_COLORS["dark"]))

    def editor_background(self, mode: str | None = None) -> QColor:
        return QColor("#1e1e1e") if (mode or self.mode) == "dark" else QColor("#eaeef3")

    def _build_palette(self, mode: str) -> QPalette:
        palette = QPalette()
        if mode == "light":
            palette.setColor(QPalette.Window, QColor("#eaeef3"))
            palette.setColor(QPalette.WindowText, QColor("#343b58"))
            palette.setColor(QPalette.Base, QColor("#eaeef3"))
            palette.setColor(QPalette.AlternateBase, QColor("#dfe3ea"))
            palette.setColor(QPalette.Text, QColor("#343b58"))
            palette.setColor(QPalette.Button, QColor("#e1e2e7"))
            palette.setColor(QPalette.ButtonText, QColor("#343b58"))
            palette.setColor(QPalette.Highlight, QColor("#99a7df"))
            palette.setColor(QPalette.HighlightedText, QColor("#000000"))
            return palette
        # Tokyo Night
        palette.setColor(QPalette.Window, QColor("#16161e"))
        palette.setColor(QPalette.WindowText, QColor("#c0caf5"))
        palette.setColor(QPalette.Base, QColor("#1e1e1e"))
        palette.setColor(QPalette.AlternateBase, QColor("#1f2335"))
        palette.setColor(QPalette.ToolTipBase, QColor("#1a1b26"))
        palette.setColor(QPalette.ToolTipText, QColor("#c0caf5"))
        palette.setColor(QPalette.Text, QColor("#c0caf5"))
        palette.setColor(QPalette.Button, QColor("#1a1b26"))
        palette.setColor(QPalette.ButtonText, QColor("#c0caf5"))
        palette.setColor(QPalette.BrightText, QColor("#ffffff"))
        palette.setColor(QPalette.Highlight, QColor("#33467c"))
        palette.setColor(QPalette.HighlightedText, QColor("#ffffff"))
        return palette

    def _preferred_font(self) -> QFont:
        size = 11
        preferred = "JetBrains Mono"
        if preferred in QFontDatabase.families():
            return QFont(preferred, size)
        font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
        font.setPointSize(size)
        return font

    def _default_syntax_colors(self, mode: str) -> dict[str, QColor]:
        if mode == "light":
            return {
                "keyword": QColor("#9854f1"),
                "string": QColor("#587539"),
                "comment": QColor("#848cb5"),
                "number": QColor("#b15c00"),
                "builtin": QColor("#007197"),
                "typehint": QColor("#2e7de9"),
                "decorator": QColor("#9854f1"),
            }
        return {
            "keyword": QColor("#bb9af7"),
            "string": QColor("#9ece6a"),
            "comment": QColor("#565f89"),
            "number": QColor("#ff9e64"),
            "builtin": QColor("#2ac3de"),
            "typehint": QColor("#7aa2f7"),
            "decorator": QColor("#bb9af7"),
        }
