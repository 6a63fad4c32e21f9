import io
import logging
import os
from dataclasses import dataclass
from typing import Optional

import docx
import pdfplumber
from PyPDF2 import PdfReader

from .exceptions import EmptyContent, ExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = {
    '.pdf': 'pdf',
    '.docx': 'docx',
    '.txt': 'txt',
}

ENGLISH_MARKERS = ['the', 'and', 'or', 'shall', 'will', 'party', 'agreement', 'contract']
MIN_ENGLISH_MARKERS = 3

CHARS_PER_PAGE = 3000
LONG_DOCUMENT_PAGES = 100


@dataclass
class ExtractionResult:
    text: str
    page_count: Optional[int] = None


def _check_pdf_encryption(file_bytes: bytes) -> PdfReader:
    try:
        reader = PdfReader(io.BytesIO(file_bytes))
        encrypted = reader.is_encrypted
    except Exception as e:
        logger.error(f"PDF open error: {e}")
        raise ExtractionError("Unable to read PDF file. Please check if it's valid.") from e

    if encrypted:
        try:
            opened = reader.decrypt('')
        except Exception as e:
            raise ExtractionError('Password-protected files are not supported') from e
        if not opened:
            raise ExtractionError('Password-protected files are not supported')
    return reader


def extract_text_from_pdf(file_bytes: bytes) -> ExtractionResult:
    """Extract text from a PDF, falling back to PyPDF2 when pdfplumber fails."""
    reader = _check_pdf_encryption(file_bytes)

    try:
        with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
            page_count = len(pdf.pages)
            text = "\n".join(page.extract_text() or "" for page in pdf.pages)
        logger.info(f"Extracted {len(text)} chars from {page_count} PDF pages with pdfplumber")
    except Exception as e:
        logger.warning(f"pdfplumber failed, falling back to PyPDF2: {e}")
        try:
            page_count = len(reader.pages)
            text = "\n".join(page.extract_text() or "" for page in reader.pages)
        except Exception as fallback_error:
            raise ExtractionError("Unable to read PDF file. Please check if it's valid.") from fallback_error

    if not text.strip():
        raise EmptyContent(
            'PDF appears to be empty or contains only images (scanned documents not supported)'
        )
    return ExtractionResult(text=text, page_count=page_count)


def extract_text_from_docx(file_bytes: bytes) -> ExtractionResult:
    """Extract paragraph and table text from a DOCX file."""
    try:
        d = docx.Document(io.BytesIO(file_bytes))
        parts = [p.text for p in d.paragraphs]
        for table in d.tables:
            for row in table.rows:
                parts.append("\t".join(cell.text for cell in row.cells))
    except Exception as e:
        logger.error(f"DOCX extraction error: {e}")
        raise ExtractionError("Unable to read DOCX file. Please check if it's valid.") from e

    text = "\n".join(parts)
    if not text.strip():
        raise EmptyContent('Document appears to be empty')
    return ExtractionResult(text=text)


def extract_text_from_txt(file_bytes: bytes) -> ExtractionResult:
    for encoding in ('utf-8-sig', 'cp1252'):
        try:
            text = file_bytes.decode(encoding)
            break
        except UnicodeDecodeError:
            continue
    else:
        raise ExtractionError('Unsupported text encoding. Please save the file as UTF-8.')

    if not text.strip():
        raise EmptyContent('File appears to be empty')
    return ExtractionResult(text=text)


EXTRACTORS = {
    'pdf': extract_text_from_pdf,
    'docx': extract_text_from_docx,
    'txt': extract_text_from_txt,
}


def extract_text(file_bytes: bytes, file_type: str) -> ExtractionResult:
    """Convert an uploaded document of a declared type into plain text.

    Dispatch is by ``file_type`` alone; the content is never sniffed. The text
    is returned verbatim so that quotes from the model can be matched against
    it later.
    """
    extractor = EXTRACTORS.get(file_type)
    if extractor is None:
        raise ExtractionError(f"Unsupported file type: {file_type}")
    return extractor(file_bytes)


def file_type_from_name(filename: str) -> Optional[str]:
    ext = os.path.splitext(filename)[1].lower()
    return SUPPORTED_TYPES.get(ext)


def file_size_ok(size: int, max_size_mb: int = 10) -> bool:
    return size <= max_size_mb * 1024 * 1024


def looks_non_english(text: str) -> bool:
    lower = text.lower()
    found = [word for word in ENGLISH_MARKERS if word in lower]
    return len(found) < MIN_ENGLISH_MARKERS


def is_very_long(text: str) -> bool:
    return len(text) / CHARS_PER_PAGE > LONG_DOCUMENT_PAGES
