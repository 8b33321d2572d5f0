"""Custom exceptions for document extractor."""

from typing import Optional


class DocumentParserError(Exception):
    """Base exception for document extractor errors."""

    pass


class UnsupportedTypeError(DocumentParserError):
    """Raised when the declared media type is not on the allow-list."""

    def __init__(self, message: str, mime_type: Optional[str] = None):
        super().__init__(message)
        self.mime_type = mime_type


class ExtractionError(DocumentParserError):
    """Raised when a document cannot be decoded.

    ``cause`` describes the underlying failure for diagnostics. The original
    exception, when there is one, is chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[str] = None):
        super().__init__(message)
        self.cause = cause or message


class DecodingError(ExtractionError):
    """Raised when a plain text document is not valid UTF-8."""

    pass
