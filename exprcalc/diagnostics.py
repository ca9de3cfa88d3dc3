"""
Source positions for error reporting.

Maps an offset in the source text to a line and column and renders a caret
under the span of a fault:

    line 1, column 7: division by zero
    1 + 2 / 0
          ^
"""

from __future__ import annotations

from typing import NamedTuple

from .core.errors import CalcError


class Location(NamedTuple):
    """1-based line and column of an offset, with the text of its line."""

    line: int
    column: int
    line_text: str


def locate(source: str, offset: int) -> Location:
    """
    Find the line and column containing ``offset``.

    Offsets past the end of ``source`` (the EOF token's position) land one
    column after the last character of the final line.
    """
    offset = max(0, min(offset, len(source)))

    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)

    line = source.count("\n", 0, offset) + 1
    column = offset - line_start + 1
    return Location(line, column, source[line_start:line_end].rstrip("\r"))


def render_diagnostic(source: str, error: CalcError) -> str:
    """Render ``error`` with its location, source line and a caret marker."""
    location = locate(source, error.start)

    # Spans crossing a newline are marked only up to the end of the line
    width = max(1, min(error.end, error.start + len(location.line_text) - location.column + 1) - error.start)
    # Keep tabs so the caret lines up with the source line
    padding = "".join(c if c == "\t" else " " for c in location.line_text[: location.column - 1])

    return "\n".join(
        [
            f"line {location.line}, column {location.column}: {error.message}",
            location.line_text,
            padding + "^" * width,
        ]
    )
