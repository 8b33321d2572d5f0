"""Data models for document extractor."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RawDocument:
    """Uploaded file bytes with their declared media type."""

    data: bytes
    mime_type: str
    file_name: str = ""


@dataclass(frozen=True)
class TextFragment:
    """A run of decoded text at a page position, in page units."""

    text: str
    x: float
    y: float


@dataclass
class Page:
    index: int
    fragments: list[TextFragment] = field(default_factory=list)


@dataclass
class Line:
    """Fragments sharing one rounded ``y``, sorted by ascending ``x``."""

    y_key: float
    fragments: list[TextFragment] = field(default_factory=list)


@dataclass
class ExtractedContent:
    """Decoder output for one document.

    ``html`` is set only when the format converts to HTML on its own (DOCX).
    """

    text: str
    html: Optional[str] = None
    page_count: int = 0


@dataclass
class ExtractionResult:
    """Result of document extraction."""

    extracted_text: str
    preview_html: str
    mime_type: str
    file_name: str
    character_count: int
    page_count: int = 0
