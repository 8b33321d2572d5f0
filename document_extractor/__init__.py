"""Text extraction and HTML preview for uploaded PDF, DOCX and text documents."""

from document_extractor.config import (
    DOCUMENT_VIEWER,
    UPLOAD_PREVIEW,
    ExtractorConfig,
    LayoutConfig,
    RenderOptions,
)
from document_extractor.detector import (
    SUPPORTED_MIME_TYPES,
    DocumentDescriptor,
    DocumentDetector,
)
from document_extractor.exceptions import (
    DecodingError,
    DocumentParserError,
    ExtractionError,
    UnsupportedTypeError,
)
from document_extractor.extractor import DocumentExtractor
from document_extractor.handler import DocumentHandler
from document_extractor.layout import reconstruct_text
from document_extractor.models import (
    ExtractionResult,
    Line,
    Page,
    RawDocument,
    TextFragment,
)
from document_extractor.parser import parse_document
from document_extractor.renderer import escape_html, render_plain_text, render_preview

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "parse_document",
    "render_preview",
    "render_plain_text",
    "reconstruct_text",
    "escape_html",
    # Core classes
    "DocumentHandler",
    "DocumentDetector",
    "DocumentExtractor",
    # Data models
    "ExtractionResult",
    "DocumentDescriptor",
    "RawDocument",
    "TextFragment",
    "Page",
    "Line",
    # Configuration
    "ExtractorConfig",
    "LayoutConfig",
    "RenderOptions",
    "UPLOAD_PREVIEW",
    "DOCUMENT_VIEWER",
    "SUPPORTED_MIME_TYPES",
    # Exceptions
    "DocumentParserError",
    "UnsupportedTypeError",
    "ExtractionError",
    "DecodingError",
]
