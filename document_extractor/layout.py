"""Reading-order reconstruction for positioned PDF text fragments.

A PDF page is an unordered bag of text runs, each at an ``(x, y)``
position. This module regroups them into lines and joins each line's runs
into text, approximating how a person would read the page: top to bottom,
left to right.

Lines are found by rounding ``y`` to ``LayoutConfig.line_decimals`` places,
sorting fragments by ``(rounded_y, x)`` and sweeping once over the result;
a new line starts whenever the rounded key changes. Words are separated by
comparing the gap between consecutive fragments with an estimated right
edge (``x + len(text) * glyph_width``), since real glyph metrics are not
available. The result is best effort: it recovers word and line breaks
well enough for display and search, not exact visual spacing.
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from document_extractor.config import LayoutConfig
from document_extractor.models import Line, Page, TextFragment
from document_extractor.normalizer import (
    collapse_whitespace,
    join_lines,
    join_pages,
    normalize_document,
)


def line_key(y: float, decimals: int) -> float:
    """Round ``y`` half away from zero on its exact decimal value."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(y).quantize(quantum, rounding=ROUND_HALF_UP))


def group_lines(
    fragments: Iterable[TextFragment], layout: LayoutConfig = LayoutConfig()
) -> list[Line]:
    """Group fragments into lines, top of page first, each sorted by ``x``."""
    keyed = [
        (line_key(fragment.y, layout.line_decimals), fragment)
        for fragment in fragments
        if fragment.text.strip()
    ]
    keyed.sort(key=lambda item: (item[0], item[1].x))

    lines: list[Line] = []
    for y_key, fragment in keyed:
        if not lines or lines[-1].y_key != y_key:
            lines.append(Line(y_key=y_key))
        lines[-1].fragments.append(fragment)
    return lines


def assemble_line(line: Line, layout: LayoutConfig = LayoutConfig()) -> str:
    """Join a line's fragments left to right, spacing them by horizontal gap."""
    parts: list[str] = []
    prev_right = None

    for fragment in line.fragments:
        current = fragment.text.strip()
        if not current:
            continue

        if prev_right is not None and fragment.x - prev_right > layout.space_gap_threshold:
            parts.append(" ")
        parts.append(current)

        prev_right = fragment.x + len(current) * layout.glyph_width

    return collapse_whitespace("".join(parts))


def page_text(page: Page, layout: LayoutConfig = LayoutConfig()) -> str:
    """Reading-order text of a single page."""
    return join_lines(assemble_line(line, layout) for line in group_lines(page.fragments, layout))


def reconstruct_text(pages: Sequence[Page], layout: LayoutConfig = LayoutConfig()) -> str:
    """Reading-order text of a whole document, pages separated by a blank line."""
    return normalize_document(join_pages(page_text(page, layout) for page in pages))
