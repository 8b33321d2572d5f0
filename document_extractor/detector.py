"""Media type validation against the supported allow-list."""

from dataclasses import dataclass

from document_extractor.exceptions import UnsupportedTypeError
from document_extractor.logger import get_logger

logger = get_logger(__name__)


PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME_TYPE = "text/plain"

SUPPORTED_MIME_TYPES = frozenset({PDF_MIME_TYPE, DOCX_MIME_TYPE, TEXT_MIME_TYPE})

PDF_SIGNATURE = b"%PDF"
ZIP_SIGNATURE = b"PK\x03\x04"


@dataclass
class DocumentDescriptor:
    mime_type: str
    file_name: str
    file_size_bytes: int = 0


class DocumentDetector:
    """Validates the declared media type of an upload.

    The declared type must be exactly one of the supported types; nothing
    is guessed from the file name. File signatures are checked for
    diagnostics but never override the declared type.
    """

    def detect(
        self, file_bytes: bytes, mime_type: str, file_name: str
    ) -> DocumentDescriptor:
        if mime_type not in SUPPORTED_MIME_TYPES:
            logger.warning(
                "Unsupported MIME type rejected",
                extra_data={
                    "file_name": file_name,
                    "mime_type": mime_type,
                },
            )
            raise UnsupportedTypeError(
                f"Unsupported mime type: {mime_type or '<none>'} (only PDF, DOCX, TXT supported)",
                mime_type=mime_type,
            )

        sniffed = self._sniff_mime(file_bytes)
        if sniffed and sniffed != mime_type:
            logger.warning(
                "File signature does not match declared MIME type",
                extra_data={
                    "file_name": file_name,
                    "mime_type": mime_type,
                    "sniffed_mime_type": sniffed,
                },
            )

        logger.info(
            "Document type accepted",
            extra_data={
                "file_name": file_name,
                "mime_type": mime_type,
                "file_size_bytes": len(file_bytes),
            },
        )

        return DocumentDescriptor(
            mime_type=mime_type,
            file_name=file_name,
            file_size_bytes=len(file_bytes),
        )

    @staticmethod
    def _sniff_mime(file_bytes: bytes) -> str | None:
        """Detect MIME type from file signature/magic bytes."""
        head = file_bytes[:4]
        if head.startswith(PDF_SIGNATURE):
            return PDF_MIME_TYPE
        if head.startswith(ZIP_SIGNATURE):
            # DOCX files are ZIP archives
            return DOCX_MIME_TYPE
        return None
