"""Content type detection for uploaded files and linked URLs."""

import enum
import mimetypes
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from app.core.exceptions import InvalidURLError


class ContentType(str, enum.Enum):
    ARTICLE = "article"
    VIDEO = "video"
    PODCAST = "podcast"
    UNKNOWN = "unknown"


VIDEO_URL_MARKERS = (
    "youtube.com",
    "youtu.be",
    "vimeo.com",
    "dailymotion.com",
    ".mp4",
    ".mov",
    ".avi",
    ".webm",
)

PODCAST_URL_MARKERS = (
    "spotify.com/episode",
    "apple.com/podcast",
    "soundcloud.com",
    "anchor.fm",
    ".mp3",
    ".wav",
    ".ogg",
    "podcast",
)

ARTICLE_URL_MARKERS = (
    "medium.com",
    "blog",
    "article",
    "news",
    ".pdf",
    ".doc",
    ".txt",
    "substack.com",
    "nytimes.com",
    "washingtonpost.com",
    "bbc.com",
    "cnn.com",
    "theguardian.com",
)

YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


@dataclass
class YouTubeInfo:
    video_id: str = ""
    thumbnail_url: str = ""


def _type_from_mime(mime_type: str) -> ContentType:
    mime_type = mime_type.lower()
    if "text" in mime_type or "pdf" in mime_type or "doc" in mime_type:
        return ContentType.ARTICLE
    if "video" in mime_type:
        return ContentType.VIDEO
    if "audio" in mime_type:
        return ContentType.PODCAST
    return ContentType.UNKNOWN


def detect_content_type_from_mime(
    mime_type: Optional[str],
    filename: Optional[str] = None
) -> ContentType:
    """
    Classify an uploaded file by its MIME type.

    Falls back to a MIME guess from the filename extension when the declared
    type is missing or generic.
    """
    detected = _type_from_mime(mime_type or "")
    if detected is ContentType.UNKNOWN and filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            detected = _type_from_mime(guessed)
    return detected


def is_pdf(mime_type: Optional[str], filename: Optional[str]) -> bool:
    return (
        (mime_type or "").lower() == "application/pdf"
        or (filename or "").lower().endswith(".pdf")
    )


def detect_content_type_from_url(url: str, strict: bool = False) -> ContentType:
    """
    Classify a URL by well-known hosts and file extensions.

    Unmatched URLs are treated as articles unless ``strict`` is set, in which
    case only URLs carrying an article hint qualify and the rest are unknown.
    """
    lower_url = url.lower()

    if any(marker in lower_url for marker in VIDEO_URL_MARKERS):
        return ContentType.VIDEO
    if any(marker in lower_url for marker in PODCAST_URL_MARKERS):
        return ContentType.PODCAST
    if not strict or any(marker in lower_url for marker in ARTICLE_URL_MARKERS):
        return ContentType.ARTICLE
    return ContentType.UNKNOWN


def normalize_url(raw_url: str) -> str:
    """Trim a user-entered URL and default the scheme to https."""
    url = (raw_url or "").strip()
    if not url:
        raise InvalidURLError("Please enter a valid URL")

    if not url.startswith("http://") and not url.startswith("https://"):
        url = "https://" + url

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidURLError(
            "Invalid URL format. Please enter a valid web address."
        ) from e

    if not parsed.hostname or " " in parsed.netloc:
        raise InvalidURLError("Invalid URL format. Please enter a valid web address.")

    return url


def get_hostname(url: str) -> str:
    return urlparse(url).hostname or url


def extract_youtube_info(url: str) -> YouTubeInfo:
    """Pull the video id and thumbnail from a YouTube watch or short link."""
    lower_url = url.lower()
    video_id = ""

    if "v=" in lower_url:
        start = lower_url.index("v=") + 2
        video_id = url[start:].split("&")[0].split("#")[0]
    elif "youtu.be/" in lower_url:
        start = lower_url.index("youtu.be/") + len("youtu.be/")
        video_id = url[start:].split("?")[0].split("/")[0]

    return YouTubeInfo(
        video_id=video_id,
        thumbnail_url=YOUTUBE_THUMBNAIL_URL.format(video_id=video_id) if video_id else ""
    )


def is_youtube_url(url: str) -> bool:
    lower_url = url.lower()
    return "youtube.com" in lower_url or "youtu.be" in lower_url


def default_title_for_url(url: str, content_type: ContentType) -> str:
    """Title used for linked content before any metadata is fetched."""
    hostname = get_hostname(url)

    if content_type is ContentType.VIDEO:
        if is_youtube_url(url) and extract_youtube_info(url).video_id:
            return "YouTube Video"
        return f"Video from {hostname}"
    if content_type is ContentType.PODCAST:
        return f"Podcast from {hostname}"
    if content_type is ContentType.ARTICLE:
        return f"Article from {hostname}"
    return f"Content from {hostname}"
