"""High-level API for document extraction."""

import mimetypes
from pathlib import Path
from typing import Optional

from document_extractor.config import ExtractorConfig
from document_extractor.detector import DOCX_MIME_TYPE
from document_extractor.handler import DocumentHandler
from document_extractor.models import ExtractionResult

mimetypes.add_type(DOCX_MIME_TYPE, ".docx")


def parse_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> ExtractionResult:
    """Extract text and preview HTML from a document.

    Accepts either a file path or raw bytes.

    Args:
        file_path: Path to document file (alternative to file_bytes)
        file_bytes: Raw document bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        mime_type: Declared MIME type. When omitted with file_path, it is guessed
            from the file extension; with file_bytes it is required.
        config: Extraction configuration (optional, uses defaults if not provided)

    Returns:
        ExtractionResult with extracted text, preview HTML and metadata

    Raises:
        ValueError: If neither file_path nor file_bytes provided, or if file_bytes
            provided without file_name
        UnsupportedTypeError: If document type is not supported
        ExtractionError: If text extraction fails
        DecodingError: If a plain text file is not valid UTF-8

    Examples:
        >>> result = parse_document(file_path="resume.pdf")
        >>> print(result.extracted_text)

        >>> with open("notes.docx", "rb") as f:
        ...     result = parse_document(
        ...         file_bytes=f.read(),
        ...         file_name="notes.docx",
        ...         config=ExtractorConfig(parse_timeout_seconds=5),
        ...     )
    """
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise ValueError(f"File not found: {file_path}")

        file_bytes = path.read_bytes()
        file_name = path.name

        if not mime_type:
            guessed_type, _ = mimetypes.guess_type(str(path))
            if guessed_type:
                mime_type = guessed_type

    if not file_name:
        raise ValueError("file_name is required when using file_bytes")

    handler = DocumentHandler(config=config)
    return handler.extract(file_bytes=file_bytes, mime_type=mime_type or "", file_name=file_name)
