"""AST node types for parsed presentations.

The node set is closed: ``Chunk`` and ``SlideChunk`` list every shape the
parser may produce, and the generator matches on exactly these classes.
Plain text chunks are ``str``. Spans are carried for diagnostics but are not
part of equality, so two parses of the same text compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from slidemark.cursor import Span


class LinkKind(str, Enum):
    PLAIN = "plain"
    GITHUB = "github"


class ItemKind(str, Enum):
    INCREMENTAL = "incremental"
    STATIC = "static"


class BlockKind(str, Enum):
    CODE = "code"
    ANNOTATE = "annotate"


@dataclass(frozen=True, slots=True)
class InlineCode:
    """`inline code`"""

    tag: ClassVar[str] = "code"

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Bold:
    """*bold text*"""

    tag: ClassVar[str] = "bold"

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Link:
    """[label](target), [label] or [gh:user/repo]."""

    tag: ClassVar[str] = "link"

    kind: LinkKind
    label: str
    target: str
    span: Span | None = field(default=None, compare=False, repr=False)


Chunk = str | InlineCode | Bold | Link
TextLine = tuple[Chunk, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    tag: ClassVar[str] = "paragraph"

    line: TextLine
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class BulletItem:
    """One list entry; the tag is the item kind."""

    kind: ItemKind
    line: TextLine
    span: Span | None = field(default=None, compare=False, repr=False)

    @property
    def tag(self) -> str:
        return self.kind.value


@dataclass(frozen=True, slots=True)
class BulletList:
    tag: ClassVar[str] = "bullet-list"

    items: tuple[BulletItem, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """:code / :annotate block. ``text`` has no trailing newline."""

    tag: ClassVar[str] = "block"

    kind: BlockKind
    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class RawBlock:
    """{{{ verbatim passthrough }}}"""

    tag: ClassVar[str] = "raw-html"

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


SlideChunk = Paragraph | BulletList | CodeBlock | RawBlock


@dataclass(frozen=True, slots=True)
class Slide:
    tag: ClassVar[str] = "slide"

    title: TextLine
    subtitle: TextLine | None
    chunks: tuple[SlideChunk, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Presentation:
    """Root node."""

    tag: ClassVar[str] = "presentation"

    slides: tuple[Slide, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


Node = Chunk | TextLine | Paragraph | BulletItem | BulletList | CodeBlock | RawBlock | Slide | Presentation


def line_text(line: TextLine) -> str:
    """Plain text of a line, with markup removed."""
    parts: list[str] = []
    for chunk in line:
        if isinstance(chunk, str):
            parts.append(chunk)
        elif isinstance(chunk, Link):
            parts.append(chunk.label)
        else:
            parts.append(chunk.text)
    return "".join(parts)
