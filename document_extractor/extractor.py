"""Format-specific text extraction for PDF, DOCX and plain text."""

import contextvars
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional

from document_extractor.config import ExtractorConfig
from document_extractor.detector import DOCX_MIME_TYPE, PDF_MIME_TYPE, TEXT_MIME_TYPE
from document_extractor.docx_reader import read_docx
from document_extractor.exceptions import DecodingError, ExtractionError, UnsupportedTypeError
from document_extractor.layout import reconstruct_text
from document_extractor.logger import Timer, get_logger
from document_extractor.models import ExtractedContent, RawDocument
from document_extractor.pdf_reader import read_pdf_pages

logger = get_logger(__name__)


class DocumentExtractor:
    """Decodes raw documents into plain text.

    PDFs are read with PyMuPDF and their reading order rebuilt from span
    positions, DOCX files are read with python-docx, plain text is decoded
    as UTF-8. Each decode runs on a worker thread so the caller's wait can be
    bounded by ``ExtractorConfig.parse_timeout_seconds``.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self._readers: dict[str, Callable[[bytes, str], ExtractedContent]] = {
            PDF_MIME_TYPE: self._extract_pdf,
            DOCX_MIME_TYPE: self._extract_docx,
            TEXT_MIME_TYPE: self._extract_text,
        }

    def extract(self, document: RawDocument) -> ExtractedContent:
        """Extract text from a document whose type has already been validated.

        Raises:
            UnsupportedTypeError: If no reader exists for the media type
            ExtractionError: If the input is too large, decoding fails or
                decoding exceeds the parse timeout
        """
        reader = self._readers.get(document.mime_type)
        if reader is None:
            raise UnsupportedTypeError(
                f"Unsupported mime type: {document.mime_type}", mime_type=document.mime_type
            )

        file_size = len(document.data)
        if file_size > self.config.max_file_size_bytes:
            logger.warning(
                "Document exceeds maximum size",
                extra_data={
                    "file_name": document.file_name,
                    "file_size_bytes": file_size,
                    "max_file_size_bytes": self.config.max_file_size_bytes,
                },
            )
            raise ExtractionError(
                f"File is larger than {self.config.max_file_size_bytes} bytes",
                cause="file too large",
            )

        logger.debug(
            "Starting document extraction",
            extra_data={
                "file_name": document.file_name,
                "mime_type": document.mime_type,
                "file_size_bytes": file_size,
            },
        )

        executor = ThreadPoolExecutor(max_workers=1)
        try:
            # Worker inherits the caller's upload ID
            context = contextvars.copy_context()
            future = executor.submit(context.run, reader, document.data, document.file_name)
            return future.result(timeout=self.config.parse_timeout_seconds)
        except FutureTimeoutError as exc:
            logger.error(
                "Document extraction timed out",
                extra_data={
                    "file_name": document.file_name,
                    "timeout_seconds": self.config.parse_timeout_seconds,
                },
            )
            raise ExtractionError(
                f"Extraction exceeded {self.config.parse_timeout_seconds}s",
                cause="parse timeout",
            ) from exc
        except ExtractionError:
            raise
        except Exception as exc:
            logger.error(
                "Document extraction failed",
                extra_data={
                    "file_name": document.file_name,
                    "mime_type": document.mime_type,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise ExtractionError(
                f"Failed to extract document: {exc}", cause=f"{type(exc).__name__}: {exc}"
            ) from exc
        finally:
            # A timed-out decode keeps running in the background; don't block on it
            executor.shutdown(wait=False)

    def _extract_pdf(self, file_bytes: bytes, file_name: str = "unknown.pdf") -> ExtractedContent:
        with Timer("pdf_decode") as decode_timer:
            pages = read_pdf_pages(file_bytes, self.config)

        with Timer("pdf_layout") as layout_timer:
            text = reconstruct_text(pages, self.config.layout)

        logger.debug(
            "PDF extraction completed",
            extra_data={
                "file_name": file_name,
                "page_count": len(pages),
                "fragment_count": sum(len(page.fragments) for page in pages),
                "characters_extracted": len(text),
                "decode_time_ms": decode_timer.get_elapsed_ms(),
                "layout_time_ms": layout_timer.get_elapsed_ms(),
            },
        )
        return ExtractedContent(text=text, page_count=len(pages))

    def _extract_docx(self, file_bytes: bytes, file_name: str = "unknown.docx") -> ExtractedContent:
        with Timer("docx_extraction") as timer:
            tree = read_docx(file_bytes)
            text = tree.to_text()
            html = tree.to_html()

        logger.debug(
            "DOCX extraction completed",
            extra_data={
                "file_name": file_name,
                "block_count": len(tree.blocks),
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return ExtractedContent(text=text, html=html)

    def _extract_text(self, file_bytes: bytes, file_name: str = "unknown.txt") -> ExtractedContent:
        try:
            text = file_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.error(
                "Failed to decode plain text file as UTF-8",
                extra_data={
                    "file_name": file_name,
                    "file_size_bytes": len(file_bytes),
                    "error_position": exc.start,
                },
            )
            raise DecodingError(
                "Unable to decode text file (not valid UTF-8)", cause=str(exc)
            ) from exc

        return ExtractedContent(text=text.removeprefix("\ufeff"))
