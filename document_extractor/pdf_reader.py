"""PDF decoding into pages of positioned text fragments."""

from urllib.parse import unquote

import fitz  # PyMuPDF

from document_extractor.config import ExtractorConfig
from document_extractor.exceptions import ExtractionError
from document_extractor.logger import get_logger
from document_extractor.models import Page, TextFragment

logger = get_logger(__name__)


def safe_decode(text: str) -> str:
    """Percent-decode glyph text, returning it unchanged if decoding fails."""
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError:
        logger.debug(
            "Fragment text failed to percent-decode, keeping raw text",
            extra_data={"text_length": len(text)},
        )
        return text


def read_pdf_pages(file_bytes: bytes, config: ExtractorConfig) -> list[Page]:
    """Decode PDF bytes into pages of fragments.

    Each text span becomes one fragment. ``x`` is the span's left edge and
    ``y`` its baseline, both converted from points to page units.

    Raises:
        ExtractionError: If the document is password protected
        fitz.FileDataError: If the PDF structure is corrupt
    """
    scale = config.points_per_unit
    pages: list[Page] = []

    with fitz.open(stream=file_bytes, filetype="pdf") as pdf_document:
        if pdf_document.needs_pass:
            raise ExtractionError(
                "PDF is password protected", cause="encrypted document"
            )

        for page_index, pdf_page in enumerate(pdf_document):
            page = Page(index=page_index)
            text_dict = pdf_page.get_text("dict")

            for block in text_dict.get("blocks", []):
                # Image blocks carry no lines
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        raw_text = span.get("text", "")
                        text = safe_decode(raw_text) if config.percent_decode_fragments else raw_text
                        if not text.strip():
                            continue

                        x0 = span["bbox"][0]
                        baseline = span.get("origin", span["bbox"][:2])[1]
                        page.fragments.append(
                            TextFragment(text=text, x=x0 / scale, y=baseline / scale)
                        )

            logger.debug(
                "Decoded PDF page",
                extra_data={
                    "page_number": page_index + 1,
                    "fragment_count": len(page.fragments),
                },
            )
            pages.append(page)

    return pages
