"""
File Upload Utility - Extract text from stored resume files.

Supported formats:
- PDF (.pdf) using PyPDF2
- Word (.docx) using python-docx

Extraction works on a file already written to disk and never modifies it,
so extracting the same file twice gives the same text.
"""

import os
from enum import Enum

from PyPDF2 import PdfReader
from docx import Document

from jobboard.core.config import get_settings
from jobboard.core.errors import UnsupportedFormat, FileOpenError, MalformedDocumentError


class DocumentFormat(str, Enum):
    pdf = "pdf"
    docx = "docx"


ALLOWED_EXTENSIONS = {'.pdf': DocumentFormat.pdf, '.docx': DocumentFormat.docx}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def format_from_filename(filename: str) -> DocumentFormat:
    """Map a filename to its document format, case-insensitively."""
    ext = get_file_extension(filename or '')
    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedFormat("Only PDF and DOCX formats are allowed")
    return ALLOWED_EXTENSIONS[ext]


def extract_text(file_path: str, format_tag: DocumentFormat) -> str:
    """
    Extract plain text from a resume file on disk.

    Args:
        file_path: Path of the stored file
        format_tag: DocumentFormat of the file

    Returns:
        Extracted text (may be empty for image-only documents)

    Raises:
        UnsupportedFormat, FileOpenError, MalformedDocumentError
    """
    try:
        format_tag = DocumentFormat(format_tag)
    except ValueError:
        raise UnsupportedFormat(f"Unsupported document format '{format_tag}'")

    try:
        handle = open(file_path, 'rb')
    except OSError as e:
        raise FileOpenError(f"Could not open resume file {os.path.basename(file_path)}: {e}") from e

    with handle:
        if format_tag == DocumentFormat.pdf:
            return extract_from_pdf(handle)
        return extract_from_docx(handle)


def extract_from_pdf(stream) -> str:
    """Extract text from a PDF, pages joined in document order."""
    try:
        reader = PdfReader(stream)
        return '\n'.join(page.extract_text() or '' for page in reader.pages)
    except Exception as e:
        raise MalformedDocumentError(f"Error reading PDF: {str(e)}") from e


def extract_from_docx(stream) -> str:
    """
    Extract text from a DOCX.

    Runs inside a paragraph are joined by a single space (each run is
    followed by one), and every paragraph ends with a newline. Body
    paragraphs come first, then table cells row by row; a merged cell
    is read once.
    """
    try:
        doc = Document(stream)
        text_parts = []
        for para in doc.paragraphs:
            _append_paragraph(text_parts, para)
        for table in doc.tables:
            seen_cells = set()
            for row in table.rows:
                for cell in row.cells:
                    if cell._tc in seen_cells:
                        continue
                    seen_cells.add(cell._tc)
                    for para in cell.paragraphs:
                        _append_paragraph(text_parts, para)
        return ''.join(text_parts)
    except Exception as e:
        raise MalformedDocumentError(f"Error reading DOCX: {str(e)}") from e


def _append_paragraph(text_parts: list, para) -> None:
    for run in para.runs:
        text_parts.append(run.text)
        text_parts.append(' ')
    text_parts.append('\n')


def get_supported_formats() -> dict:
    """Get info about supported file formats."""
    return {
        "supported_formats": [
            {"extension": ".pdf", "name": "PDF"},
            {"extension": ".docx", "name": "Word Document"}
        ],
        "max_size_mb": get_settings().max_resume_size_mb
    }
