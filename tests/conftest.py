"""
Test configuration and fixtures
"""
import io

import fitz
import pytest
from docx import Document

from document_extractor.logger import upload_id_var


@pytest.fixture(autouse=True)
def reset_upload_id():
    """Keep upload IDs from leaking between tests"""
    token = upload_id_var.set(None)
    yield
    upload_id_var.reset(token)


@pytest.fixture
def make_pdf():
    """Build a PDF from a list of pages, each a list of (x, y, text) in points"""

    def _make(pages):
        pdf = fitz.open()
        for items in pages:
            page = pdf.new_page()
            for x, y, text in items:
                page.insert_text((x, y), text, fontsize=11)
        data = pdf.tobytes()
        pdf.close()
        return data

    return _make


@pytest.fixture
def sample_pdf(make_pdf):
    return make_pdf(
        [
            [
                (72, 72, "Hello World"),
                (72, 100, "Second line"),
                (300, 72, "Right"),
            ],
            [],
            [(72, 72, "Page two")],
        ]
    )


@pytest.fixture
def sample_docx():
    doc = Document()
    doc.add_heading("Project Plan", level=1)
    intro = doc.add_paragraph("Intro ")
    intro.add_run("bold").bold = True
    doc.add_paragraph("First item", style="List Bullet")
    doc.add_paragraph("Second item", style="List Bullet")
    doc.add_paragraph("Closing <note> & more")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Name"
    table.cell(0, 1).text = "Value"

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
