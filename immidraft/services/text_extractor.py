"""
Text extraction from uploaded documents
"""
import io
from pathlib import Path
from typing import Optional
import pypdf
from docx import Document as DocxDocument
from immidraft.utils.exceptions import DocumentProcessingError
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_TYPES = {"text/plain", "text/markdown", "text/csv"}


def extract_from_pdf(content: bytes) -> str:
    """Text of every page of a PDF"""
    reader = pypdf.PdfReader(io.BytesIO(content))
    pages = []
    for page in reader.pages:
        page_text = page.extract_text()
        if page_text:
            pages.append(page_text)
    return "\n".join(pages)


def extract_from_docx(content: bytes) -> str:
    """Paragraph and table text of a DOCX file"""
    document = DocxDocument(io.BytesIO(content))
    parts = [para.text for para in document.paragraphs if para.text.strip()]

    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))

    return "\n".join(parts)


def extract_from_txt(content: bytes) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def extract_text(content: bytes, filename: str, mime_type: Optional[str] = None) -> str:
    """
    Extract plain text from a file

    The type is taken from the MIME type, then the extension.

    Args:
        content: file bytes
        filename: original filename
        mime_type: MIME type reported at upload

    Returns:
        extracted text (stripped)

    Raises:
        DocumentProcessingError: unsupported type or unreadable file
    """
    extension = Path(filename).suffix.lower()

    try:
        if mime_type in PDF_TYPES or extension == ".pdf":
            text = extract_from_pdf(content)
        elif mime_type in DOCX_TYPES or extension == ".docx":
            text = extract_from_docx(content)
        elif mime_type in TEXT_TYPES or extension in (".txt", ".md", ".csv"):
            text = extract_from_txt(content)
        else:
            raise DocumentProcessingError(
                f"text extraction is not supported for {mime_type or extension or 'unknown type'}",
                filename
            )
    except DocumentProcessingError:
        raise
    except Exception as e:
        logger.error(f"Text extraction failed: {filename} - {str(e)}")
        raise DocumentProcessingError(f"could not read {filename}: {str(e)}", filename)

    text = text.strip()
    logger.debug(f"Extracted {len(text)} characters from {filename}")
    return text
