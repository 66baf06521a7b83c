"""Article text and metadata extraction from web pages."""

import re
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import httpx
import structlog
from bs4 import BeautifulSoup
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.config import settings
from app.core.content_detection import (
    ContentType,
    detect_content_type_from_url,
    extract_youtube_info,
    get_hostname,
    is_youtube_url,
)

logger = structlog.get_logger()


# Checked in order; the first selector that matches supplies the main text
CONTENT_SELECTORS = [
    "article",
    '[role="main"]',
    ".post-content",
    ".article-content",
    ".entry-content",
    ".content",
    "#content",
    "main",
]

STRIPPED_TAGS = ["script", "style", "noscript", "iframe"]

FETCH_FAILED_MESSAGE = "Failed to extract content from this URL."

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class ExtractedContent:
    """Text and metadata pulled from a source."""
    title: str = ""
    content: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    content_type: ContentType = ContentType.UNKNOWN
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "description": self.description,
            "image_url": self.image_url,
            "author": self.author,
            "publish_date": self.publish_date,
            "content_type": self.content_type.value,
        }


def _meta(soup: BeautifulSoup, **attrs) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    value = tag.get("content")
    return value.strip() if value else None


def _clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _main_text(soup: BeautifulSoup) -> str:
    for tag in soup.find_all(STRIPPED_TAGS):
        tag.decompose()

    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        if elements:
            text = " ".join(element.get_text(" ") for element in elements).strip()
            if text:
                return text
            # Empty wrapper; fall through to paragraphs
            break

    paragraphs = soup.find_all("p")
    text = "\n\n".join(p.get_text(" ").strip() for p in paragraphs).strip()
    if text:
        return text

    body = soup.body or soup
    return body.get_text(" ").strip()


def extract_content_from_html(html: str, url: str) -> ExtractedContent:
    """
    Parse a page into title, main text and social metadata.

    Args:
        html: Raw page markup
        url: Address the page came from, used for type detection and as
            the title fallback

    Returns:
        ExtractedContent with whitespace-normalised text
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    return ExtractedContent(
        title=title or get_hostname(url),
        content=_clean_text(_main_text(soup)),
        description=(
            _meta(soup, name="description")
            or _meta(soup, property="og:description")
            or ""
        ),
        image_url=_meta(soup, property="og:image") or _meta(soup, name="twitter:image"),
        author=_meta(soup, name="author") or _meta(soup, property="article:author"),
        publish_date=_meta(soup, property="article:published_time"),
        content_type=detect_content_type_from_url(url),
    )


def _media_placeholder(url: str, content_type: ContentType) -> ExtractedContent:
    """Metadata-only record for audio/video links."""
    hostname = get_hostname(url)

    if content_type is ContentType.VIDEO and is_youtube_url(url):
        info = extract_youtube_info(url)
        return ExtractedContent(
            title="YouTube Video",
            content="",
            image_url=info.thumbnail_url or None,
            content_type=ContentType.VIDEO,
            metadata={"video_id": info.video_id},
        )

    label = "Video" if content_type is ContentType.VIDEO else "Podcast"
    return ExtractedContent(
        title=f"{label} from {hostname}",
        content="",
        content_type=content_type,
    )


class ContentExtractor:
    """
    Fetches linked pages and extracts their readable content.

    Video and podcast links are not downloaded; they produce a metadata
    record only.
    """

    def __init__(self, timeout: float = None):
        self.timeout = timeout or settings.url_fetch_timeout
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT}
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True
    )
    async def _fetch_html(self, url: str) -> str:
        response = await self.client.get(url)
        response.raise_for_status()
        return response.text

    async def fetch_and_extract(self, url: str) -> ExtractedContent:
        """Fetch a URL and extract its content; never raises on fetch errors."""
        content_type = detect_content_type_from_url(url)

        if content_type in (ContentType.VIDEO, ContentType.PODCAST):
            return _media_placeholder(url, content_type)

        try:
            html = await self._fetch_html(url)
            return extract_content_from_html(html, url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Content extraction failed", url=url, error=str(e))
            return ExtractedContent(
                title=f"Content from {get_hostname(url)}",
                content=FETCH_FAILED_MESSAGE,
                content_type=ContentType.UNKNOWN,
            )
