"""Regex-driven JavaScript syntax highlighting for the source pane."""
from __future__ import annotations

import re
from typing import Iterable, Pattern

from PySide6.QtGui import QFont, QSyntaxHighlighter, QTextCharFormat, QTextDocument

from astlens.core.theme import ThemeManager


class RegexHighlighter(QSyntaxHighlighter):
    """Base class for regex-driven syntax highlighters with block comments."""

    def __init__(self, document: QTextDocument, theme: ThemeManager | None) -> None:
        super().__init__(document)
        self.theme = theme or ThemeManager()
        self.rules: list[tuple[Pattern[str], QTextCharFormat]] = []
        self._block_comment_tokens: tuple[str, str] | None = None
        self._comment_format = self._fmt("comment")

    def _fmt(self, color_key: str, *, bold: bool = False) -> QTextCharFormat:
        fmt = QTextCharFormat()
        fmt.setForeground(self.theme.syntax_color(color_key))
        if bold:
            fmt.setFontWeight(QFont.Weight.Bold)
        return fmt

    def add_keyword_rule(self, keywords: Iterable[str], fmt: QTextCharFormat) -> None:
        pattern = r"\b(" + "|".join(re.escape(k) for k in sorted(keywords)) + r")\b"
        self.add_rule(pattern, fmt)

    def add_rule(self, pattern: str, fmt: QTextCharFormat) -> None:
        self.rules.append((re.compile(pattern), fmt))

    def set_block_comment(self, start: str, end: str) -> None:
        self._block_comment_tokens = (start, end)

    def highlightBlock(self, text: str) -> None:  # type: ignore[override]
        self.setCurrentBlockState(0)

        for pattern, fmt in self.rules:
            for match in pattern.finditer(text):
                start, end = match.span()
                if end > start:
                    self.setFormat(start, end - start, fmt)

        self._apply_block_comments(text)

    def _apply_block_comments(self, text: str) -> None:
        if not self._block_comment_tokens:
            return

        start_token, end_token = self._block_comment_tokens
        start_index = 0 if self.previousBlockState() == 1 else text.find(start_token)

        while start_index >= 0:
            end_index = text.find(end_token, start_index + len(start_token))
            if end_index == -1:
                self.setCurrentBlockState(1)
                comment_length = len(text) - start_index
            else:
                comment_length = end_index - start_index + len(end_token)
            if comment_length > 0:
                self.setFormat(start_index, comment_length, self._comment_format)
            if end_index == -1:
                break
            start_index = text.find(start_token, start_index + comment_length)


class JavaScriptHighlighter(RegexHighlighter):
    """Highlighter for JavaScript source."""

    KEYWORDS = {
        "async", "await", "break", "case", "catch", "class", "const", "continue",
        "debugger", "default", "delete", "do", "else", "export", "extends", "false",
        "finally", "for", "from", "function", "if", "import", "in", "instanceof",
        "let", "new", "null", "of", "return", "static", "super", "switch", "this",
        "throw", "true", "try", "typeof", "undefined", "var", "void", "while",
        "with", "yield",
    }

    BUILTINS = {
        "Array", "Boolean", "Date", "Error", "JSON", "Map", "Math", "Number",
        "Object", "Promise", "RegExp", "Set", "String", "Symbol", "console",
    }

    def __init__(self, document: QTextDocument, theme: ThemeManager | None) -> None:
        super().__init__(document, theme)
        self._build_rules()

    def _build_rules(self) -> None:
        string_fmt = self._fmt("string")
        self.add_keyword_rule(self.KEYWORDS, self._fmt("keyword"))
        self.add_rule(r"\b0[xob][0-9a-fA-F]+\b|\b\d+(?:\.\d+)?(?:e[+-]?\d+)?\b", self._fmt("number"))
        self.add_keyword_rule(self.BUILTINS, self._fmt("builtin"))
        self.add_rule(r"\b[A-Z][A-Za-z0-9_]*\b", self._fmt("typehint"))
        self.add_rule(r"'(?:[^'\\]|\\.)*'", string_fmt)
        self.add_rule(r'"(?:[^"\\]|\\.)*"', string_fmt)
        self.add_rule(r"`(?:[^`\\]|\\.)*`", string_fmt)
        self.add_rule(r"//[^\n]*", self._comment_format)
        self.set_block_comment("/*", "*/")
