"""Source text extraction for web pages and documents."""

from app.core.extraction.html_extractor import (
    ContentExtractor,
    ExtractedContent,
    extract_content_from_html,
)
from app.core.extraction.pdf_extractor import extract_text_from_pdf, decode_text_file

__all__ = [
    "ContentExtractor",
    "ExtractedContent",
    "extract_content_from_html",
    "extract_text_from_pdf",
    "decode_text_file"
]
