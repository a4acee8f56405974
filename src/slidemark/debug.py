"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from slidemark.ast import (
    BulletList,
    CodeBlock,
    Link,
    LinkKind,
    Paragraph,
    Presentation,
    RawBlock,
    Slide,
    SlideChunk,
    TextLine,
)


def dump_ast(presentation: Presentation, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Presentation\n")
    for slide in presentation.slides:
        _dump_slide(slide, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_slide(slide: Slide, depth: int, f: TextIO) -> None:
    where = f" @{slide.span.start.line}" if slide.span is not None else ""
    f.write(f"{_indent(depth)}Slide{where}\n")
    f.write(f"{_indent(depth + 1)}Title {_line_inline(slide.title)}\n")
    if slide.subtitle is not None:
        f.write(f"{_indent(depth + 1)}Subtitle {_line_inline(slide.subtitle)}\n")
    for chunk in slide.chunks:
        _dump_chunk(chunk, depth + 1, f)


def _dump_chunk(chunk: SlideChunk, depth: int, f: TextIO) -> None:
    if isinstance(chunk, Paragraph):
        f.write(f"{_indent(depth)}Paragraph {_line_inline(chunk.line)}\n")
    elif isinstance(chunk, BulletList):
        f.write(f"{_indent(depth)}BulletList\n")
        for item in chunk.items:
            f.write(f"{_indent(depth + 1)}{item.kind.value} {_line_inline(item.line)}\n")
    elif isinstance(chunk, CodeBlock):
        f.write(f"{_indent(depth)}CodeBlock :{chunk.kind.value} {chunk.text!r}\n")
    elif isinstance(chunk, RawBlock):
        f.write(f"{_indent(depth)}RawBlock({chunk.text!r})\n")


def _line_inline(line: TextLine) -> str:
    parts: list[str] = []
    for chunk in line:
        if isinstance(chunk, str):
            parts.append(repr(chunk))
        elif isinstance(chunk, Link):
            if chunk.kind is LinkKind.GITHUB:
                parts.append(f"Link(gh:{chunk.target})")
            else:
                parts.append(f"Link({chunk.label!r} -> {chunk.target!r})")
        else:
            parts.append(f"{type(chunk).__name__}({chunk.text!r})")
    return "[" + ", ".join(parts) + "]"
