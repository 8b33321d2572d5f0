"""Whitespace normalization and line/page joining."""

import re
from collections.abc import Iterable

_WHITESPACE_RE = re.compile(r"\s+")

LINE_SEPARATOR = "\n"
PAGE_SEPARATOR = "\n\n"


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def join_lines(lines: Iterable[str]) -> str:
    """Join the non-empty lines of one page with newlines."""
    return LINE_SEPARATOR.join(line for line in lines if line)


def join_pages(pages: Iterable[str]) -> str:
    """Join page texts with a blank line. Pages without text are skipped."""
    return PAGE_SEPARATOR.join(page for page in pages if page)


def normalize_document(text: str) -> str:
    """Trim leading and trailing whitespace from a whole document."""
    return text.strip()
