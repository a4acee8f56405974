"""Parser combinator primitives over a ``Cursor``.

A parser is any callable ``(Cursor) -> T``. It either returns a value, having
advanced the cursor past what it matched, or raises ``NoMatch``. ``NoMatch``
is a soft failure: ``choice``, ``many``, ``optional`` and the lookahead
parsers catch it and reset the cursor to the mark taken before the attempt,
so the next alternative always starts from the same position.

A ``ParseError`` is a hard failure. It is never caught here and aborts the
whole parse; ``committed`` is the only primitive that raises one.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from slidemark.cursor import TERMINATORS, Cursor, Position, Span, describe
from slidemark.errors import ParseError

T = TypeVar("T")

Parser = Callable[[Cursor], T]


class NoMatch(Exception):
    """Soft failure: the parser did not match at ``position``."""

    def __init__(self, expected: str, position: Position, found: str) -> None:
        self.expected = expected
        self.position = position
        self.found = found
        super().__init__(f"expected {expected}, found {found}")


def no_match(cursor: Cursor, expected: str) -> NoMatch:
    return NoMatch(expected, cursor.position(), describe(cursor.peek()))


# ---------------------------------------------------------------------------
# Character-level primitives
# ---------------------------------------------------------------------------


def literal(text: str) -> Parser[str]:
    """Match ``text`` exactly. Never consumes on failure."""

    def parse(cursor: Cursor) -> str:
        if not cursor.startswith(text):
            raise no_match(cursor, repr(text))
        return cursor.advance_by(len(text))

    return parse


def excluding(chars: str) -> Parser[str]:
    """Match the longest run of characters not in ``chars`` on this line."""
    stop = frozenset(chars) | TERMINATORS

    def parse(cursor: Cursor) -> str:
        run: list[str] = []
        while not cursor.at_eof() and cursor.peek() not in stop:
            run.append(cursor.advance())
        return "".join(run)

    return parse


def non_terminator(cursor: Cursor) -> str:
    """Match any single character except a line terminator."""
    if cursor.at_line_end():
        raise no_match(cursor, "a character")
    return cursor.advance()


def newline(cursor: Cursor) -> str:
    """Match one line terminator: \\r\\n, \\n or \\r."""
    if cursor.startswith("\r\n"):
        return cursor.advance_by(2)
    if cursor.peek() in TERMINATORS:
        return cursor.advance()
    raise no_match(cursor, "end of line")


def end_of_input(cursor: Cursor) -> None:
    if not cursor.at_eof():
        raise no_match(cursor, "end of input")


def line_end(cursor: Cursor) -> None:
    """Match a line terminator or end of input."""
    if not cursor.at_eof():
        newline(cursor)


def skip_space(cursor: Cursor) -> None:
    """Skip spaces and tabs; stays on the current line."""
    while cursor.peek() in (" ", "\t") and not cursor.at_eof():
        cursor.advance()


def skip_whitespace(cursor: Cursor) -> None:
    """Skip spaces, tabs and line terminators."""
    while cursor.peek() != "" and cursor.peek().isspace():
        cursor.advance()


rest_of_line = excluding("")


# ---------------------------------------------------------------------------
# Composite primitives
# ---------------------------------------------------------------------------


def delimited(delim: str, build: Callable[[str], T]) -> Parser[T]:
    """``delim`` text ``delim`` on a single line, returned as ``build(text)``.

    Fails without consuming when the closing delimiter is missing.
    """
    opener = literal(delim)
    body = excluding(delim)

    def parse(cursor: Cursor) -> T:
        opener(cursor)
        text = body(cursor)
        opener(cursor)
        return build(text)

    return attempt(parse)


def attempt(parser: Parser[T]) -> Parser[T]:
    """Run ``parser``; on ``NoMatch`` put the cursor back where it was."""

    def parse(cursor: Cursor) -> T:
        mark = cursor.mark()
        try:
            return parser(cursor)
        except NoMatch:
            cursor.reset(mark)
            raise

    return parse


def choice(*alternatives: Parser[T]) -> Parser[T]:
    """First alternative that matches, each tried from the same position."""

    def parse(cursor: Cursor) -> T:
        mark = cursor.mark()
        expected: list[str] = []
        for alternative in alternatives:
            try:
                return alternative(cursor)
            except NoMatch as exc:
                cursor.reset(mark)
                expected.append(exc.expected)
        raise NoMatch(" or ".join(expected), mark, describe(cursor.peek()))

    return parse


def many(parser: Parser[T]) -> Parser[list[T]]:
    """Zero or more matches. Stops after a match that consumed nothing."""

    def parse(cursor: Cursor) -> list[T]:
        results: list[T] = []
        while True:
            mark = cursor.mark()
            try:
                result = parser(cursor)
            except NoMatch:
                cursor.reset(mark)
                return results
            results.append(result)
            if cursor.offset == mark.offset:
                return results

    return parse


def many1(parser: Parser[T]) -> Parser[list[T]]:
    rest = many(parser)

    def parse(cursor: Cursor) -> list[T]:
        first = attempt(parser)(cursor)
        return [first, *rest(cursor)]

    return parse


def optional(parser: Parser[T], default: T | None = None) -> Parser[T | None]:
    def parse(cursor: Cursor) -> T | None:
        mark = cursor.mark()
        try:
            return parser(cursor)
        except NoMatch:
            cursor.reset(mark)
            return default

    return parse


def peek(parser: Parser[object]) -> Parser[bool]:
    """Lookahead: report whether ``parser`` would match, consuming nothing."""

    def parse(cursor: Cursor) -> bool:
        mark = cursor.mark()
        try:
            parser(cursor)
        except NoMatch:
            return False
        finally:
            cursor.reset(mark)
        return True

    return parse


def not_followed_by(parser: Parser[object], what: str) -> Parser[None]:
    """Succeed, consuming nothing, only when ``parser`` would not match."""
    probe = peek(parser)

    def parse(cursor: Cursor) -> None:
        if probe(cursor):
            raise NoMatch(f"anything but {what}", cursor.position(), what)

    return parse


def committed(guard: Parser[object], parser: Parser[T], message: str) -> Parser[T]:
    """Once ``guard`` matches, a ``NoMatch`` from ``parser`` is a syntax error.

    If ``guard`` does not match the result is an ordinary ``NoMatch`` and the
    caller may still try another alternative.
    """

    def parse(cursor: Cursor) -> T:
        start = cursor.mark()
        try:
            guard(cursor)
        except NoMatch:
            cursor.reset(start)
            raise
        cursor.reset(start)
        try:
            return parser(cursor)
        except NoMatch as exc:
            raise ParseError(
                f"{message} (opened at {start.line}:{start.column}): "
                f"expected {exc.expected}, found {exc.found}",
                Span(exc.position, exc.position),
                cursor.source,
                expected=exc.expected,
                found=exc.found,
            ) from None

    return parse
