"""Core business logic package"""

from app.core.database import engine, Base, get_db

# Detection & extraction
from app.core.content_detection import (
    detect_content_type_from_mime,
    detect_content_type_from_url,
    normalize_url
)
from app.core.extraction import ContentExtractor, extract_text_from_pdf

# Transformation
from app.core.prompts import build_system_prompt
from app.core.repurposer import ContentRepurposer

# Storage
from app.core.storage import ObjectStorage, LocalStorage, S3Storage, get_storage

__all__ = [
    # Database
    "engine",
    "Base",
    "get_db",
    # Detection & extraction
    "detect_content_type_from_mime",
    "detect_content_type_from_url",
    "normalize_url",
    "ContentExtractor",
    "extract_text_from_pdf",
    # Transformation
    "build_system_prompt",
    "ContentRepurposer",
    # Storage
    "ObjectStorage",
    "LocalStorage",
    "S3Storage",
    "get_storage"
]
