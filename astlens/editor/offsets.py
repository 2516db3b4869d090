"""Byte offset to character offset translation.

Parsers report spans in UTF-8 byte offsets while the editor addresses text by
character. An :class:`OffsetTable` has one entry per encoded byte holding the
index of the character that owns the byte.

Span convention
---------------
Spans are ``HALF_OPEN_BYTES``: ``start`` is the first byte the node owns and
``end`` is one past the last byte it owns. Both ends translate through the
table the same way; no endpoint receives an extra ``+1``. An endpoint equal
to the byte length has no table entry and maps to the character length, so
an empty span at end of file stays empty.
"""
from __future__ import annotations

from typing import Sequence

HALF_OPEN_BYTES = "half-open-bytes"
SPAN_CONVENTION = HALF_OPEN_BYTES


def _is_continuation(byte: int) -> bool:
    return byte & 0b1100_0000 == 0b1000_0000


class OffsetTable(Sequence[int]):
    """Immutable byte -> character index table for one source text."""

    __slots__ = ("_table", "_char_length")

    def __init__(self, table: Sequence[int], char_length: int) -> None:
        self._table = tuple(table)
        self._char_length = char_length

    def __len__(self) -> int:
        return len(self._table)

    def __getitem__(self, index):  # type: ignore[override]
        return self._table[index]

    def __repr__(self) -> str:
        return f"OffsetTable(bytes={len(self._table)}, chars={self._char_length})"

    @property
    def byte_length(self) -> int:
        return len(self._table)

    @property
    def char_length(self) -> int:
        return self._char_length

    def lookup(self, byte_offset: int) -> int | None:
        """Return the owning character index, or ``None`` outside the table."""

        if 0 <= byte_offset < len(self._table):
            return self._table[byte_offset]
        return None

    def translate(self, byte_offset: int) -> int:
        """Translate with ``byte_offset`` clamped to ``[0, len - 1]``."""

        if not self._table:
            return 0
        clamped = min(max(byte_offset, 0), len(self._table) - 1)
        return self._table[clamped]

    def translate_span(self, start: int, end: int) -> tuple[int, int]:
        """Translate a ``HALF_OPEN_BYTES`` span to a half-open character range."""

        char_start = self._endpoint(start)
        return char_start, max(char_start, self._endpoint(end))

    def _endpoint(self, byte_offset: int) -> int:
        # Offsets at or past the end of the table sit after the last character.
        char_index = self.lookup(max(byte_offset, 0))
        return self._char_length if char_index is None else char_index


def build_offset_table(text: str) -> OffsetTable:
    """Build the byte -> character table for ``text``."""

    encoded = text.encode("utf-8", errors="surrogatepass")
    table: list[int] = []
    counter = -1
    for byte in encoded:
        # Lead and ASCII bytes start a new character, continuation bytes reuse it.
        if counter < 0 or not _is_continuation(byte):
            counter += 1
        table.append(counter)
    return OffsetTable(table, len(text))
