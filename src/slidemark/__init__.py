"""Slide markup to HTML compiler."""

from __future__ import annotations

__version__ = "0.1.0"


def compile(source: str, title: str | None = None, lang: str | None = None) -> str:
    """Parse, generate, and render slide markup to a standalone HTML document.

    The title defaults to the text of the first slide's title.
    """
    from slidemark.ast import line_text
    from slidemark.generator import generate_presentation
    from slidemark.parser import parse
    from slidemark.render import render_document

    presentation = parse(source)
    tree = generate_presentation(presentation)
    if title is None and presentation.slides:
        title = line_text(presentation.slides[0].title)
    return render_document(tree, title=title, lang=lang)
