"""
End-to-end extraction tests
"""
import logging
import time

import pytest

from document_extractor import (
    DecodingError,
    DocumentHandler,
    ExtractionError,
    ExtractorConfig,
    UnsupportedTypeError,
    parse_document,
)
from document_extractor.detector import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    TEXT_MIME_TYPE,
    DocumentDetector,
)
from document_extractor.extractor import DocumentExtractor
from document_extractor.logger import get_logger, upload_id_var, upload_scope
from document_extractor.models import ExtractedContent
from document_extractor.renderer import EMPTY_PLACEHOLDER


class ExplodingExtractor:
    """Fails the test if decoding is ever attempted"""

    def extract(self, document):
        raise AssertionError("extractor must not be called")


class TestDetection:

    def test_unsupported_type_is_rejected_before_decoding(self):
        handler = DocumentHandler(extractor=ExplodingExtractor())
        with pytest.raises(UnsupportedTypeError) as excinfo:
            handler.extract(b"\x89PNG....", "image/png", "photo.png")
        assert excinfo.value.mime_type == "image/png"

    @pytest.mark.parametrize("mime_type", ["", "application/octet-stream", "text/plain; charset=utf-8"])
    def test_only_exact_allowed_types_are_accepted(self, mime_type, sample_pdf):
        handler = DocumentHandler(extractor=ExplodingExtractor())
        with pytest.raises(UnsupportedTypeError):
            handler.extract(sample_pdf, mime_type, "report.pdf")

    def test_extension_does_not_rescue_generic_type(self):
        with pytest.raises(UnsupportedTypeError):
            DocumentDetector().detect(b"hello", "", "notes.txt")

    def test_declared_type_wins_over_signature(self):
        descriptor = DocumentDetector().detect(b"%PDF-1.7", TEXT_MIME_TYPE, "odd.txt")
        assert descriptor.mime_type == TEXT_MIME_TYPE


class TestPdf:

    def test_pdf_text_in_reading_order(self, sample_pdf):
        result = DocumentHandler().extract(sample_pdf, PDF_MIME_TYPE, "sample.pdf")
        assert result.extracted_text == "Hello World Right\nSecond line\n\nPage two"
        assert result.preview_html == ""
        assert result.page_count == 3
        assert result.character_count == len(result.extracted_text)

    def test_pdf_extraction_is_idempotent(self, sample_pdf):
        handler = DocumentHandler()
        first = handler.extract(sample_pdf, PDF_MIME_TYPE, "sample.pdf")
        second = handler.extract(sample_pdf, PDF_MIME_TYPE, "sample.pdf")
        assert first.extracted_text == second.extracted_text

    def test_pdf_without_text(self, make_pdf):
        result = DocumentHandler().extract(make_pdf([[], []]), PDF_MIME_TYPE, "blank.pdf")
        assert result.extracted_text == ""
        assert result.preview_html == EMPTY_PLACEHOLDER

    def test_garbage_bytes_raise_extraction_error(self):
        with pytest.raises(ExtractionError) as excinfo:
            DocumentHandler().extract(b"not a pdf", PDF_MIME_TYPE, "garbage.pdf")
        assert "FileDataError" in excinfo.value.cause

    def test_truncated_pdf_raises_extraction_error(self, sample_pdf):
        truncated = sample_pdf[: len(sample_pdf) // 2]
        with pytest.raises(ExtractionError) as excinfo:
            DocumentHandler().extract(truncated, PDF_MIME_TYPE, "truncated.pdf")
        assert "FileDataError" in excinfo.value.cause

    def test_decode_failure_is_wrapped(self, monkeypatch):
        def broken(file_bytes, config):
            raise RuntimeError("cannot open broken document")

        monkeypatch.setattr("document_extractor.extractor.read_pdf_pages", broken)
        with pytest.raises(ExtractionError) as excinfo:
            DocumentHandler().extract(b"%PDF-1.4 junk", PDF_MIME_TYPE, "broken.pdf")
        assert "cannot open broken document" in excinfo.value.cause
        assert isinstance(excinfo.value.__cause__, RuntimeError)


class TestDocx:

    def test_docx_text_and_html(self, sample_docx):
        result = DocumentHandler().extract(sample_docx, DOCX_MIME_TYPE, "plan.docx")
        assert result.extracted_text.startswith("Project Plan\n\nIntro bold")
        assert result.preview_html.startswith("<h1>Project Plan</h1>")
        assert "&lt;note&gt;" in result.preview_html

    def test_corrupt_docx_raises_extraction_error(self):
        with pytest.raises(ExtractionError):
            DocumentHandler().extract(b"PK\x03\x04not a zip", DOCX_MIME_TYPE, "bad.docx")


class TestPlainText:

    def test_text_is_returned_verbatim(self):
        body = "Line one\n  Line <two>\n"
        result = DocumentHandler().extract(body.encode("utf-8"), TEXT_MIME_TYPE, "a.txt")
        assert result.extracted_text == body
        assert result.preview_html.endswith("Line one\n  Line &lt;two&gt;\n</pre>")

    def test_byte_order_mark_is_stripped(self):
        result = DocumentHandler().extract(b"\xef\xbb\xbfhello", TEXT_MIME_TYPE, "bom.txt")
        assert result.extracted_text == "hello"

    def test_invalid_utf8_raises_decoding_error(self):
        with pytest.raises(DecodingError) as excinfo:
            DocumentHandler().extract(b"\xff\xfe\xfa", TEXT_MIME_TYPE, "bad.txt")
        assert isinstance(excinfo.value, ExtractionError)

    def test_empty_text_file_gets_placeholder(self):
        result = DocumentHandler().extract(b"", TEXT_MIME_TYPE, "empty.txt")
        assert result.extracted_text == ""
        assert result.preview_html == EMPTY_PLACEHOLDER


class TestLimits:

    def test_oversized_input_is_rejected(self):
        handler = DocumentHandler(config=ExtractorConfig(max_file_size_bytes=4))
        with pytest.raises(ExtractionError) as excinfo:
            handler.extract(b"too long", TEXT_MIME_TYPE, "big.txt")
        assert excinfo.value.cause == "file too large"

    def test_slow_decode_times_out(self):
        extractor = DocumentExtractor(ExtractorConfig(parse_timeout_seconds=0.05))

        def slow(file_bytes, file_name):
            time.sleep(0.5)
            return ExtractedContent(text="late")

        extractor._readers[TEXT_MIME_TYPE] = slow
        with pytest.raises(ExtractionError) as excinfo:
            DocumentHandler(extractor=extractor).extract(b"x", TEXT_MIME_TYPE, "slow.txt")
        assert excinfo.value.cause == "parse timeout"


class TestParseDocument:

    def test_from_path_guesses_type(self, tmp_path, sample_pdf):
        path = tmp_path / "doc.pdf"
        path.write_bytes(sample_pdf)
        result = parse_document(file_path=str(path))
        assert result.mime_type == PDF_MIME_TYPE
        assert result.file_name == "doc.pdf"
        assert "Second line" in result.extracted_text

    def test_bytes_require_file_name(self):
        with pytest.raises(ValueError):
            parse_document(file_bytes=b"abc")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError):
            parse_document(file_path=str(tmp_path / "missing.pdf"))

    def test_unsupported_bytes(self):
        with pytest.raises(UnsupportedTypeError):
            parse_document(file_bytes=b"GIF89a", file_name="x.gif", mime_type="image/gif")

    def test_bytes_without_type_are_rejected(self):
        with pytest.raises(UnsupportedTypeError):
            parse_document(file_bytes=b"hello", file_name="notes.txt")


def test_log_records_carry_upload_id(caplog):
    caplog.set_level(logging.INFO, logger="document_extractor.test")
    with upload_scope("upload-1"):
        get_logger("document_extractor.test").info("Stored", extra_data={"pages": 2})
    assert upload_id_var.get() is None
    assert caplog.records[-1].getMessage() == "Stored [pages=2, upload_id=upload-1]"


def test_upload_id_does_not_outlive_the_call(caplog):
    caplog.set_level(logging.INFO, logger="document_extractor")
    DocumentHandler().extract(b"hello", TEXT_MIME_TYPE, "a.txt", upload_id="upload-2")
    assert upload_id_var.get() is None
    assert any("upload_id=upload-2" in record.getMessage() for record in caplog.records)


def test_parse_document_guesses_docx_from_path(tmp_path, sample_docx):
    path = tmp_path / "plan.docx"
    path.write_bytes(sample_docx)
    assert parse_document(file_path=str(path)).mime_type == DOCX_MIME_TYPE
