"""Article search for the research page."""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

import httpx
import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.config import settings

logger = structlog.get_logger()


@dataclass
class Article:
    id: str
    title: str
    description: str = ""
    source: str = ""
    url: str = ""
    image_url: Optional[str] = None
    published_at: str = ""


@dataclass
class SearchParams:
    tags: List[str] = field(default_factory=list)
    query: str = ""
    page: int = 1
    page_size: int = 10


@dataclass
class SearchResults:
    articles: List[Article]
    total_results: int
    page: int
    page_size: int
    total_pages: int


def _matches(article: Article, needle: str) -> bool:
    return needle in article.title.lower() or needle in (article.description or "").lower()


def filter_articles(
    articles: List[Article],
    tags: Optional[List[str]] = None,
    query: str = ""
) -> List[Article]:
    """
    Keep articles matching any tag and the free-text query.

    Matching is case-insensitive against title and description.
    """
    filtered = list(articles)

    lower_tags = [tag.lower() for tag in (tags or []) if tag]
    if lower_tags:
        filtered = [a for a in filtered if any(_matches(a, tag) for tag in lower_tags)]

    if query:
        lower_query = query.lower()
        filtered = [a for a in filtered if _matches(a, lower_query)]

    return filtered


def paginate(articles: List[Article], page: int = 1, page_size: int = 10) -> SearchResults:
    total_results = len(articles)
    start = (page - 1) * page_size
    return SearchResults(
        articles=articles[start:start + page_size],
        total_results=total_results,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total_results / page_size),
    )


class NewsClient:
    """News API client wrapper"""

    def __init__(self, api_key: str = None, base_url: str = None):
        self.api_key = api_key or settings.news_api_key
        self.base_url = base_url or settings.news_api_url
        self.client = httpx.AsyncClient(timeout=30.0)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @staticmethod
    def _to_article(item: Dict[str, Any], index: int) -> Article:
        return Article(
            id=item.get("url") or str(index),
            title=item.get("title") or "",
            description=item.get("description") or "",
            source=(item.get("source") or {}).get("name", ""),
            url=item.get("url") or "",
            image_url=item.get("urlToImage"),
            published_at=item.get("publishedAt") or "",
        )

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True
    )
    async def _search(self, q: str, page_size: int) -> List[Dict[str, Any]]:
        response = await self.client.get(
            self.base_url,
            params={
                "q": q,
                "pageSize": min(page_size, 100),
                "sortBy": "publishedAt",
                "language": "en",
            },
            headers={"X-Api-Key": self.api_key}
        )
        response.raise_for_status()
        return response.json().get("articles", [])

    async def fetch_articles(self, params: SearchParams) -> SearchResults:
        """Query the news API, then filter and paginate locally."""
        terms = [params.query] if params.query else []
        terms.extend(f'"{tag}"' if " " in tag else tag for tag in params.tags)
        q = " OR ".join(terms) or "content marketing"

        items = await self._search(q, page_size=100)
        articles = [self._to_article(item, i) for i, item in enumerate(items)]

        logger.info("Fetched news articles", query=q, count=len(articles))
        return paginate(
            filter_articles(articles, params.tags, params.query),
            params.page,
            params.page_size
        )
