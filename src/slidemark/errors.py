"""Error types with formatted source context."""

from __future__ import annotations

from slidemark.cursor import Span


class ParseError(Exception):
    """Raised on the first syntax error, with span and source context.

    ``expected`` and ``found`` describe the failing point when the error
    came from a grammar alternative that did not match.
    """

    def __init__(
        self,
        message: str,
        span: Span,
        source: str,
        expected: str | None = None,
        found: str | None = None,
        filename: str = "input.slides",
    ) -> None:
        self.message = message
        self.span = span
        self.source = source
        self.expected = expected
        self.found = found
        self.filename = filename
        super().__init__(self.format())

    def with_filename(self, filename: str) -> ParseError:
        """Copy of this error reported against *filename*."""
        return ParseError(
            self.message,
            self.span,
            self.source,
            expected=self.expected,
            found=self.found,
            filename=filename,
        )

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class GenerateError(Exception):
    """Raised when the generator meets a node outside the AST's closed shape.

    This is an internal fault (the parser produced something it never should),
    not a problem with the user's input.
    """

    def __init__(self, message: str, node: object) -> None:
        self.message = message
        self.node = node
        super().__init__(self.format())

    def format(self) -> str:
        return f"internal error: {self.message}: {self.node!r}"
