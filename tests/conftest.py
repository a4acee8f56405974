"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from slidemark.ast import Paragraph, Presentation, Slide, SlideChunk
from slidemark.cursor import Cursor
from slidemark.parser import parse


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Presentation."""

    def _parse(source: str) -> Presentation:
        return parse(source)

    return _parse


@pytest.fixture
def run():
    """Return a helper that runs a parser over source and returns (result, cursor)."""

    def _run(parser, source: str):
        cursor = Cursor(source)
        return parser(cursor), cursor

    return _run


def only_slide(presentation: Presentation) -> Slide:
    """Assert the presentation holds exactly one slide and return it."""
    assert len(presentation.slides) == 1, f"Expected 1 slide, got {len(presentation.slides)}"
    return presentation.slides[0]


def only_chunk(presentation: Presentation) -> SlideChunk:
    """Assert a single slide with a single chunk and return the chunk."""
    slide = only_slide(presentation)
    assert len(slide.chunks) == 1, f"Expected 1 chunk, got {slide.chunks!r}"
    return slide.chunks[0]


def paragraph_line(presentation: Presentation) -> tuple:
    """Line of the single paragraph in a single-slide presentation."""
    chunk = only_chunk(presentation)
    assert isinstance(chunk, Paragraph), f"Expected Paragraph, got {type(chunk).__name__}"
    return chunk.line
