"""Parser contract and decoding of parser output."""
from __future__ import annotations

import json
from typing import Any, Protocol

from astlens.core.errors import ParseFailure

_FAILURE_KEYS = frozenset({"message", "line", "column"})


class Parser(Protocol):
    """Anything that turns source text into AST JSON text."""

    def parse_module(self, source: str) -> str:
        """Return JSON text or raise :class:`ParseFailure`."""
        ...


def _as_location(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def decode_ast(json_text: str) -> Any:
    """Decode parser output into a raw AST value.

    A top-level object holding only ``message``/``line``/``column`` is the
    parser's structured failure and is raised as :class:`ParseFailure`.
    """

    try:
        raw = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise ParseFailure(f"Parser returned malformed JSON: {exc.msg}") from exc

    if isinstance(raw, dict) and "message" in raw and set(raw) <= _FAILURE_KEYS:
        raise ParseFailure(
            str(raw["message"]),
            line=_as_location(raw.get("line")),
            column=_as_location(raw.get("column")),
        )
    return raw
