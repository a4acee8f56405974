"""Source positions and the character cursor the combinators run over."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


# Line terminators: \n, \r\n, or a lone \r
TERMINATORS = frozenset("\r\n")


class Cursor:
    """Read position over an immutable source buffer.

    The whole cursor state is a ``Position``; ``mark()`` returns it and
    ``reset()`` restores it, which is how every choice point backtracks.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1

    @property
    def source(self) -> str:
        return self._source

    @property
    def offset(self) -> int:
        return self._pos

    def position(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def mark(self) -> Position:
        return self.position()

    def reset(self, mark: Position) -> None:
        self._pos = mark.offset
        self._line = mark.line
        self._col = mark.column

    def span_from(self, start: Position) -> Span:
        return Span(start, self.position())

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def at_eof(self) -> bool:
        return self._pos >= len(self._source)

    def at_line_end(self) -> bool:
        return self.at_eof() or self._source[self._pos] in TERMINATORS

    def startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n" or (ch == "\r" and self.peek() != "\n"):
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def advance_by(self, count: int) -> str:
        return "".join(self.advance() for _ in range(count))


def describe(ch: str) -> str:
    """Human-readable name of a character for 'found ...' diagnostics."""
    if ch == "":
        return "end of input"
    if ch in TERMINATORS:
        return "end of line"
    if ch.isspace():
        return "whitespace"
    return repr(ch)
