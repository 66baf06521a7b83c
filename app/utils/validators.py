"""Input validation utilities"""

import re
from typing import List

from app.config import settings
from app.schemas.job import ProcessingOptions, TargetFormat


SOCIAL_PLATFORMS = ["twitter", "linkedin", "instagram", "facebook", "youtube"]

# Formats that only make sense for a given source type
ARTICLE_ONLY_FORMATS = [TargetFormat.AUDIO_PODCAST.value, TargetFormat.VIDEO_CONTENT.value]


def validate_platform(platform: str) -> bool:
    """
    Validate that a social platform name is supported.
    """
    return platform.lower() in SOCIAL_PLATFORMS


def validate_upload_size(size_bytes: int) -> bool:
    """
    Validate that an upload fits the configured size limit.
    """
    return 0 < size_bytes <= settings.max_upload_size_mb * 1024 * 1024


def sanitize_filename(filename: str) -> str:
    """
    Sanitize a filename to remove problematic characters.
    """
    # Remove or replace problematic characters
    sanitized = re.sub(r'[<>:"/\\|?*]', '_', filename)
    sanitized = re.sub(r'\s+', '_', sanitized)
    sanitized = re.sub(r'_+', '_', sanitized)
    sanitized = sanitized.strip('_')

    # Limit length
    if len(sanitized) > 200:
        sanitized = sanitized[:200]

    return sanitized


def validate_processing_options(options: ProcessingOptions, source_type: str) -> List[str]:
    """
    Validate transformation options against the source content.

    Returns a list of error messages (empty if valid).
    """
    errors = []

    for platform in options.platforms:
        if not validate_platform(platform):
            errors.append(f"Invalid platform: {platform}")

    if options.target_format in ARTICLE_ONLY_FORMATS and source_type != "article":
        errors.append(
            f"{options.target_format} is only available for article content"
        )

    if options.method == "manual" and not options.sample_output:
        errors.append("Manual transformations require a sample output")

    return errors
