"""Plain-text extraction from PDF documents."""

import io

import structlog
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from app.core.exceptions import ExtractionError

logger = structlog.get_logger()


def extract_text_from_pdf(data: bytes) -> str:
    """
    Extract the text of every page, separated by blank lines.

    Raises:
        ExtractionError: if the document cannot be parsed
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError, KeyError, OSError) as e:
        logger.error("PDF extraction failed", error=str(e))
        raise ExtractionError(f"Failed to extract text from PDF: {e}") from e

    logger.debug("Extracted PDF text", pages=len(pages))
    return "\n\n".join(pages).strip()


def decode_text_file(data: bytes) -> str:
    """Decode an uploaded text document, tolerating stray bytes."""
    try:
        return data.decode("utf-8").strip()
    except UnicodeDecodeError:
        return data.decode("latin-1").strip()
