"""
Text extraction unit tests
"""
import io
import pytest
from docx import Document as DocxDocument
from immidraft.services.text_extractor import extract_text
from immidraft.utils.exceptions import DocumentProcessingError


def make_docx(*paragraphs) -> bytes:
    document = DocxDocument()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Course"
    table.rows[0].cells[1].text = "Grade A"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_plain_text():
    assert extract_text(b"  Bachelor of Science \n", "degree.txt") == "Bachelor of Science"


def test_latin1_fallback():
    assert extract_text("Jos\xe9".encode("latin-1"), "name.txt", "text/plain") == "Jos\xe9"


def test_docx_paragraphs_and_tables():
    text = extract_text(make_docx("University of Lisbon", "Diploma"), "diploma.docx")
    assert "University of Lisbon" in text
    assert "Diploma" in text
    assert "Course | Grade A" in text


def test_unsupported_type():
    with pytest.raises(DocumentProcessingError):
        extract_text(b"\x89PNG....", "scan.png", "image/png")


def test_unreadable_pdf():
    with pytest.raises(DocumentProcessingError):
        extract_text(b"not really a pdf", "broken.pdf", "application/pdf")
