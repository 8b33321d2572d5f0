"""Preview HTML rendering for extracted text.

Extracted text carries no font or style information, so structure is
guessed per line: short upper-case lines become headings, lines starting
with a bullet marker become list items, everything else is a paragraph.
The output is a best-effort preview, not a faithful document structure.
"""

import re

from document_extractor.config import DOCUMENT_VIEWER, RenderOptions

EMPTY_PLACEHOLDER = '<p style="color:#888;">No extracted text found.</p>'

PLAIN_TEXT_STYLE = (
    "white-space: pre-wrap; "
    "font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace;"
)

BULLET_MARKERS = ("•", "-")
_BULLET_RE = re.compile(r"^[-•]\s*")

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters. ``&`` goes first."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def is_heading(line: str, max_length: int) -> bool:
    return (
        line.upper() == line
        and len(line) <= max_length
        and "@" not in line
        and "|" not in line
    )


def is_bullet(line: str) -> bool:
    return line.startswith(BULLET_MARKERS)


def render_preview(text: str, options: RenderOptions = DOCUMENT_VIEWER) -> str:
    """Render extracted text as a preview HTML fragment.

    Args:
        text: Newline-delimited extracted text
        options: Heading cap, blank-line handling and inline styles

    Returns:
        HTML fragment; a muted placeholder when there is no text
    """
    text = (text or "").strip()
    if not text:
        return EMPTY_PLACEHOLDER

    html: list[str] = []
    in_list = False

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if not line and not options.keep_blank_lines:
            continue

        # Bullet markers win over the heading test so "- A" stays a list item
        if is_bullet(line):
            if not in_list:
                html.append(f'<ul style="{options.list_style}">')
                in_list = True
            item = escape_html(_BULLET_RE.sub("", line, count=1))
            html.append(f'<li style="{options.list_item_style}">{item}</li>')
            continue

        if in_list:
            html.append("</ul>")
            in_list = False

        if not line:
            html.append(f'<div style="{options.spacer_style}"></div>')
        elif is_heading(line, options.heading_max_length):
            html.append(f'<h2 style="{options.heading_style}">{escape_html(line)}</h2>')
        else:
            html.append(f'<p style="{options.paragraph_style}">{escape_html(line)}</p>')

    if in_list:
        html.append("</ul>")

    return "".join(html)


def render_plain_text(text: str) -> str:
    """Wrap plain text in a whitespace-preserving block."""
    if not (text or "").strip():
        return EMPTY_PLACEHOLDER
    return f'<pre style="{PLAIN_TEXT_STYLE}">{escape_html(text)}</pre>'
