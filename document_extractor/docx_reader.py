"""DOCX decoding into a paragraph/run tree with text and HTML converters."""

import io
import re
from dataclasses import dataclass, field
from typing import Union

from docx import Document
from docx.table import Table
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph

from document_extractor.normalizer import normalize_document
from document_extractor.renderer import escape_html

_HEADING_STYLE_RE = re.compile(r"^heading\s*(\d+)$", re.IGNORECASE)

PARAGRAPH = "paragraph"
HEADING = "heading"
LIST_ITEM = "list_item"


@dataclass
class DocxRun:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def to_html(self) -> str:
        html = escape_html(self.text)
        if self.underline:
            html = f"<u>{html}</u>"
        if self.italic:
            html = f"<em>{html}</em>"
        if self.bold:
            html = f"<strong>{html}</strong>"
        return html


@dataclass
class DocxParagraph:
    kind: str = PARAGRAPH
    level: int = 0
    runs: list[DocxRun] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def inner_html(self) -> str:
        return "".join(run.to_html() for run in self.runs)


@dataclass
class DocxTable:
    rows: list[list[str]] = field(default_factory=list)

    def to_text(self) -> str:
        return "\n".join("\t".join(cells) for cells in self.rows)

    def to_html(self) -> str:
        body = "".join(
            "<tr>" + "".join(f"<td>{escape_html(cell)}</td>" for cell in cells) + "</tr>"
            for cells in self.rows
        )
        return f"<table>{body}</table>"


DocxBlock = Union[DocxParagraph, DocxTable]


@dataclass
class DocxTree:
    """Body content of a DOCX file in document order."""

    blocks: list[DocxBlock] = field(default_factory=list)

    def to_text(self) -> str:
        """Raw text: every paragraph followed by a blank line."""
        parts: list[str] = []
        for block in self.blocks:
            if isinstance(block, DocxTable):
                parts.append(block.to_text() + "\n\n")
            else:
                parts.append(block.text + "\n\n")
        return normalize_document("".join(parts))

    def to_html(self) -> str:
        html: list[str] = []
        in_list = False

        for block in self.blocks:
            if isinstance(block, DocxParagraph) and not block.text.strip():
                continue

            is_item = isinstance(block, DocxParagraph) and block.kind == LIST_ITEM
            if is_item and not in_list:
                html.append("<ul>")
                in_list = True
            elif not is_item and in_list:
                html.append("</ul>")
                in_list = False

            if isinstance(block, DocxTable):
                html.append(block.to_html())
            elif block.kind == HEADING:
                html.append(f"<h{block.level}>{block.inner_html()}</h{block.level}>")
            elif block.kind == LIST_ITEM:
                html.append(f"<li>{block.inner_html()}</li>")
            else:
                html.append(f"<p>{block.inner_html()}</p>")

        if in_list:
            html.append("</ul>")

        return "".join(html)


def _classify(paragraph: Paragraph) -> tuple[str, int]:
    style_name = (paragraph.style.name if paragraph.style is not None else "") or ""

    if style_name == "Title":
        return HEADING, 1

    match = _HEADING_STYLE_RE.match(style_name)
    if match:
        return HEADING, min(max(int(match.group(1)), 1), 6)

    p_pr = paragraph._p.pPr
    if style_name.startswith("List") or (p_pr is not None and p_pr.numPr is not None):
        return LIST_ITEM, 0

    return PARAGRAPH, 0


def _read_runs(paragraph: Paragraph) -> list[DocxRun]:
    runs: list[DocxRun] = []
    for item in paragraph.iter_inner_content():
        # Hyperlinks wrap their own runs
        inner = item.runs if isinstance(item, Hyperlink) else [item]
        for run in inner:
            if run.text:
                runs.append(
                    DocxRun(
                        text=run.text,
                        bold=bool(run.bold),
                        italic=bool(run.italic),
                        underline=bool(run.underline),
                    )
                )
    return runs


def _read_table(table: Table) -> DocxTable:
    return DocxTable(rows=[[cell.text.strip() for cell in row.cells] for row in table.rows])


def read_docx(file_bytes: bytes) -> DocxTree:
    """Parse DOCX bytes into a ``DocxTree``.

    Raises whatever python-docx raises for a damaged package; callers wrap it.
    """
    document = Document(io.BytesIO(file_bytes))
    tree = DocxTree()

    for item in document.iter_inner_content():
        if isinstance(item, Table):
            tree.blocks.append(_read_table(item))
            continue

        kind, level = _classify(item)
        tree.blocks.append(DocxParagraph(kind=kind, level=level, runs=_read_runs(item)))

    return tree
