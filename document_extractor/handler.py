"""Document handler orchestration."""

from typing import Optional

from document_extractor.config import ExtractorConfig
from document_extractor.detector import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    DocumentDescriptor,
    DocumentDetector,
)
from document_extractor.exceptions import ExtractionError
from document_extractor.extractor import DocumentExtractor
from document_extractor.logger import Timer, get_logger, upload_scope
from document_extractor.models import ExtractedContent, ExtractionResult, RawDocument
from document_extractor.renderer import EMPTY_PLACEHOLDER, render_plain_text

logger = get_logger(__name__)


class DocumentHandler:
    def __init__(
        self,
        detector: Optional[DocumentDetector] = None,
        extractor: Optional[DocumentExtractor] = None,
        config: Optional[ExtractorConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            detector: Media type detector. If None, creates default.
            extractor: Document extractor. If None, creates default with config.
            config: Extraction configuration. Only used if extractor is None.
        """
        self.detector = detector or DocumentDetector()
        self.extractor = extractor or DocumentExtractor(config=config)

    def extract(
        self,
        file_bytes: bytes,
        mime_type: str,
        file_name: str,
        upload_id: Optional[str] = None,
    ) -> ExtractionResult:
        """Extract text and preview HTML from an uploaded document.

        Args:
            file_bytes: Raw file content
            mime_type: Declared MIME type
            file_name: Original filename
            upload_id: Correlation ID for log records; generated if omitted

        Returns:
            ExtractionResult with extracted text and preview HTML

        Raises:
            UnsupportedTypeError: If the media type is not PDF, DOCX or plain text
            ExtractionError: If the document cannot be decoded
        """
        with upload_scope(upload_id):
            return self._extract(file_bytes, mime_type, file_name)

    def _extract(self, file_bytes: bytes, mime_type: str, file_name: str) -> ExtractionResult:
        # Detection happens before any decoding
        with Timer("detection") as detect_timer:
            descriptor = self.detector.detect(
                file_bytes=file_bytes, mime_type=mime_type, file_name=file_name
            )

        logger.debug(
            "Document detection completed",
            extra_data={
                "file_name": file_name,
                "mime_type": descriptor.mime_type,
                "detection_time_ms": detect_timer.get_elapsed_ms(),
            },
        )

        document = RawDocument(
            data=file_bytes, mime_type=descriptor.mime_type, file_name=descriptor.file_name
        )

        with Timer("extraction") as extract_timer:
            try:
                content = self.extractor.extract(document)
            except ExtractionError as exc:
                logger.error(
                    "Document extraction failed",
                    extra_data={
                        "file_name": file_name,
                        "mime_type": descriptor.mime_type,
                        "error_type": type(exc).__name__,
                        "error": exc.cause,
                        "extraction_time_ms": extract_timer.get_elapsed_ms(),
                    },
                )
                raise

        text = content.text
        if not text.strip():
            logger.warning(
                "No text content extracted from document",
                extra_data={
                    "file_name": file_name,
                    "mime_type": descriptor.mime_type,
                    "file_size_bytes": descriptor.file_size_bytes,
                },
            )

        preview_html = self._preview_html(descriptor, content)

        logger.info(
            "Successfully extracted text from document",
            extra_data={
                "file_name": file_name,
                "mime_type": descriptor.mime_type,
                "character_count": len(text),
                "page_count": content.page_count,
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )

        return ExtractionResult(
            extracted_text=text,
            preview_html=preview_html,
            mime_type=descriptor.mime_type,
            file_name=descriptor.file_name,
            character_count=len(text),
            page_count=content.page_count,
        )

    @staticmethod
    def _preview_html(descriptor: DocumentDescriptor, content: ExtractedContent) -> str:
        """Pick the preview for a format.

        PDFs are previewed from the original file, so no HTML is produced
        unless there is nothing to show.
        """
        if not content.text.strip():
            return EMPTY_PLACEHOLDER
        if descriptor.mime_type == PDF_MIME_TYPE:
            return ""
        if descriptor.mime_type == DOCX_MIME_TYPE:
            return content.html or EMPTY_PLACEHOLDER
        return render_plain_text(content.text)
