"""Slide markup grammar, built from the combinator primitives."""

from __future__ import annotations

from dataclasses import replace
from typing import TypeVar

from slidemark.ast import (
    BlockKind,
    Bold,
    BulletItem,
    BulletList,
    Chunk,
    CodeBlock,
    InlineCode,
    ItemKind,
    Link,
    LinkKind,
    Paragraph,
    Presentation,
    RawBlock,
    Slide,
    SlideChunk,
    TextLine,
)
from slidemark.combinators import (
    NoMatch,
    Parser,
    attempt,
    choice,
    committed,
    delimited,
    end_of_input,
    excluding,
    line_end,
    literal,
    many,
    many1,
    newline,
    no_match,
    non_terminator,
    not_followed_by,
    optional,
    rest_of_line,
    skip_space,
    skip_whitespace,
)
from slidemark.cursor import Cursor, Span
from slidemark.errors import ParseError

N = TypeVar("N", InlineCode, Bold, Link)


def located(parser: Parser[N]) -> Parser[N]:
    """Attach the matched source span to the node ``parser`` returns."""

    def parse(cursor: Cursor) -> N:
        start = cursor.mark()
        node = parser(cursor)
        return replace(node, span=cursor.span_from(start))

    return parse


# ---------------------------------------------------------------------------
# Inline content
# ---------------------------------------------------------------------------

inline_code = committed(
    literal("`"),
    located(delimited("`", InlineCode)),
    "unterminated inline code",
)

bold = located(delimited("*", Bold))

_open_bracket = literal("[")
_close_bracket = literal("]")
_github_prefix = literal("[gh:")
_slash = literal("/")
_github_user = excluding("/]")
_up_to_bracket = excluding("]")
_open_paren = literal("(")
_close_paren = literal(")")
_up_to_paren = excluding(")")


def _github_link(cursor: Cursor) -> Link:
    _github_prefix(cursor)
    user = _github_user(cursor)
    _slash(cursor)
    repo = _up_to_bracket(cursor)
    _close_bracket(cursor)
    target = f"{user}/{repo}"
    return Link(LinkKind.GITHUB, target, target)


def _link_target(cursor: Cursor) -> str:
    _open_paren(cursor)
    target = _up_to_paren(cursor)
    _close_paren(cursor)
    return target


def _plain_link(cursor: Cursor) -> Link:
    _open_bracket(cursor)
    label = _up_to_bracket(cursor)
    _close_bracket(cursor)
    # An opened but unclosed target spoils the whole link
    target = _link_target(cursor) if cursor.peek() == "(" else label
    return Link(LinkKind.PLAIN, label, target)


github_link = located(attempt(_github_link))
plain_link = located(attempt(_plain_link))

_inline = choice(inline_code, bold, github_link, plain_link, non_terminator)
_inline_run = many(_inline)
_optional_newline = optional(newline)


def text_line(cursor: Cursor) -> TextLine:
    """Parse the rest of a line into chunks, consuming its terminator."""
    parsed = _inline_run(cursor)
    _optional_newline(cursor)
    return _coalesce_text(parsed)


def _coalesce_text(parsed: list[Chunk]) -> TextLine:
    """Merge runs of single characters into one string chunk."""
    result: list[Chunk] = []
    run: list[str] = []
    for item in parsed:
        if isinstance(item, str):
            run.append(item)
            continue
        if run:
            result.append("".join(run))
            run.clear()
        result.append(item)
    if run:
        result.append("".join(run))
    return tuple(result)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

_ITEM_KINDS: dict[str, ItemKind] = {
    "* ": ItemKind.INCREMENTAL,
    "+ ": ItemKind.STATIC,
}

_bullet_marker = choice(literal("* "), literal("+ "))


def _bullet_item(cursor: Cursor) -> BulletItem:
    start = cursor.mark()
    marker = _bullet_marker(cursor)
    skip_space(cursor)
    line = text_line(cursor)
    return BulletItem(_ITEM_KINDS[marker], line, cursor.span_from(start))


_bullet_items = many1(_bullet_item)


def bullet_list(cursor: Cursor) -> BulletList:
    start = cursor.mark()
    items = _bullet_items(cursor)
    return BulletList(tuple(items), cursor.span_from(start))


_block_marker = choice(literal(":code"), literal(":annotate"))


def _block_header(cursor: Cursor) -> BlockKind:
    marker = _block_marker(cursor)
    line_end(cursor)
    return BlockKind(marker[1:])


_indent = literal("  ")


def _indented_line(cursor: Cursor) -> str:
    _indent(cursor)
    text = rest_of_line(cursor)
    line_end(cursor)
    return text


def _blank_line(cursor: Cursor) -> str:
    skip_space(cursor)
    newline(cursor)
    return ""


_code_lines = many(choice(_indented_line, _blank_line))


def _code_block(cursor: Cursor) -> CodeBlock:
    start = cursor.mark()
    kind = _block_header(cursor)
    lines = _code_lines(cursor)
    if cursor.peek() == " ":
        raise no_match(cursor, "two-space indentation")
    text = "\n".join(lines).rstrip("\n")
    return CodeBlock(kind, text, cursor.span_from(start))


code_block = committed(
    _block_header,
    _code_block,
    "broken indentation in code block",
)

_RAW_CLOSE = "}}}"
_raw_open = literal("{{{")
_raw_close = literal(_RAW_CLOSE)


def _raw_block(cursor: Cursor) -> RawBlock:
    start = cursor.mark()
    _raw_open(cursor)
    content: list[str] = []
    while not cursor.startswith(_RAW_CLOSE):
        if cursor.at_eof():
            raise no_match(cursor, repr(_RAW_CLOSE))
        content.append(cursor.advance())
    _raw_close(cursor)
    return RawBlock("".join(content), cursor.span_from(start))


raw_block = committed(_raw_open, _raw_block, "unterminated raw block")


def paragraph(cursor: Cursor) -> Paragraph:
    start = cursor.mark()
    line = text_line(cursor)
    return Paragraph(line, cursor.span_from(start))


slide_chunk: Parser[SlideChunk] = choice(code_block, bullet_list, raw_block, paragraph)


# ---------------------------------------------------------------------------
# Slides
# ---------------------------------------------------------------------------

_slide_marker = literal("=")
_subtitle_marker = literal("==")
_slide_boundary = not_followed_by(choice(end_of_input, _slide_marker), "a slide marker")


def _chunk(cursor: Cursor) -> SlideChunk:
    _slide_boundary(cursor)
    return slide_chunk(cursor)


_chunks = many(_chunk)


def _skip_empty_markers(cursor: Cursor) -> None:
    """Fold '=' lines without a title of their own into the next marker."""
    while True:
        skip_space(cursor)
        if not cursor.at_line_end():
            return
        skip_whitespace(cursor)
        if cursor.peek() != "=" or cursor.startswith("=="):
            return
        _slide_marker(cursor)


def _subtitle(cursor: Cursor) -> TextLine:
    _subtitle_marker(cursor)
    skip_space(cursor)
    return text_line(cursor)


_optional_subtitle = optional(_subtitle)


def slide(cursor: Cursor) -> Slide:
    start = cursor.mark()
    _slide_marker(cursor)
    _skip_empty_markers(cursor)

    title_start = cursor.mark()
    title = text_line(cursor)
    if not title:
        raise ParseError(
            "expected slide title after '='",
            Span(title_start, title_start),
            cursor.source,
            expected="slide title",
            found="end of input" if cursor.at_eof() else "empty line",
        )

    subtitle = _optional_subtitle(cursor)
    chunks = tuple(c for c in _chunks(cursor) if not _is_empty_paragraph(c))
    return Slide(title, subtitle, chunks, cursor.span_from(start))


def _is_empty_paragraph(chunk: SlideChunk) -> bool:
    return isinstance(chunk, Paragraph) and not chunk.line


_slides = many(slide)


def presentation(cursor: Cursor) -> Presentation:
    start = cursor.mark()
    slides = _slides(cursor)
    if not cursor.at_eof():
        raise no_match(cursor, "'=' starting a slide")
    return Presentation(tuple(slides), cursor.span_from(start))


def parse(source: str, filename: str = "input.slides") -> Presentation:
    """Parse a whole presentation. Raises ``ParseError`` on the first failure.

    *filename* is only used to label the error.
    """
    cursor = Cursor(source)
    try:
        return presentation(cursor)
    except NoMatch as exc:
        raise ParseError(
            f"expected {exc.expected}, found {exc.found}",
            Span(exc.position, exc.position),
            source,
            expected=exc.expected,
            found=exc.found,
            filename=filename,
        ) from None
    except ParseError as exc:
        raise exc.with_filename(filename) from None
