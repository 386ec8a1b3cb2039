"""Plain-text extraction from uploaded resume files (PDF, DOCX, TXT)."""

import io
import logging
from pathlib import PurePath

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


def extract_text_pdf(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all paragraph text from a DOCX file."""
    doc = Document(io.BytesIO(docx_bytes))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_text_plain(data: bytes) -> str:
    # Undecodable bytes are replaced rather than rejected
    return data.decode("utf-8", errors="replace").strip()


def extract_text(filename: str, data: bytes) -> str:
    """Dispatch on the file extension. Raises ValueError for unsupported types."""
    suffix = PurePath(filename or "").suffix.lower()
    if suffix == ".pdf":
        text = extract_text_pdf(data)
    elif suffix == ".docx":
        text = extract_text_docx(data)
    elif suffix == ".txt":
        text = extract_text_plain(data)
    else:
        raise ValueError(
            f"Unsupported file type '{suffix or filename}'. "
            f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    logger.debug("Extracted %d characters from %s", len(text), filename)
    return text
