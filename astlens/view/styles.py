"""Style layer for the AST tree: token class names and the Qt style sheet."""
from __future__ import annotations

from astlens.core.theme import TreeTheme

JSON_CONTAINER = "jsonContainer"
OBJECT = "jsonObject"
OBJECT_HEADER = "jsonObject__header"
HEADER_NAME = "jsonObject__header__name"
HEADER_TOGGLE = "jsonObject__header__toggle"
CONTENT = "jsonObject__content"
ITEM = "jsonObject__content__item"
ITEM_KEY = "jsonObject__content__item__key"
ITEM_VALUE = "jsonObject__content__item__value"
KEY_BUTTON = "jsonObject__keyButton"
TRIVIA = "jsonObject__trivia"
ARRAY = "jsonArray"
ARRAY_CONTENT = "jsonArray__content"
ARRAY_ITEM = "jsonArray__item"
ARRAY_EMPTY = "jsonArray__empty"
STRING = "jsonString"
NUMBER = "jsonNumber"
BOOLEAN = "jsonBool"
NULL = "jsonNull"

PRIMITIVE_CLASSES = {
    "string": STRING,
    "number": NUMBER,
    "boolean": BOOLEAN,
    "null": NULL,
}

# Glyphs drawn around a label's text by the host, never part of the data.
DECORATIONS: dict[str, tuple[str, str]] = {
    STRING: ('"', '"'),
    ITEM_KEY: ("", ":"),
}

MONO_FONT = '"JetBrains Mono", "Cascadia Code", "Source Code Pro", Menlo, Consolas, "DejaVu Sans Mono", monospace'

# Indentation in pixels for nested content regions.
INDENTS = {
    CONTENT: 20,
    ARRAY_CONTENT: 8,
}


def decorate(css_class: str, text: str) -> str:
    prefix, suffix = DECORATIONS.get(css_class, ("", ""))
    return f"{prefix}{text}{suffix}"


def _declarations(style: dict[str, str]) -> str:
    return " ".join(f"{name}: {value};" for name, value in style.items())


def _rule(css_class: str, style: dict[str, str]) -> str:
    return f'QLabel[tokenClass="{css_class}"] {{ {_declarations(style)} }}'


def make_style_sheet(theme: TreeTheme) -> str:
    """Build the Qt style sheet that colours tree labels for ``theme``."""

    rules = [
        f'QWidget[tokenClass="{JSON_CONTAINER}"] {{ background-color: {theme.background}; }}',
        f"QLabel {{ font-family: {MONO_FONT}; }}",
        _rule(TRIVIA, {"color": "grey"}),
        _rule(ARRAY_EMPTY, {"color": "grey"}),
        _rule(HEADER_NAME, {**theme.style_for("title"), "font-weight": "600"}),
        _rule(HEADER_TOGGLE, {**theme.style_for("key"), "font-weight": "600"}),
        _rule(ITEM_KEY, theme.style_for("key")),
        _rule(STRING, theme.style_for("string")),
        _rule(NUMBER, theme.style_for("number")),
        _rule(BOOLEAN, theme.style_for("boolean")),
        _rule(NULL, theme.style_for("null")),
    ]
    return "\n".join(rules)
