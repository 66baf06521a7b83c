"""Research search over the news feed or the local article archive."""

from typing import Optional

import httpx
import structlog
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.content_detection import ContentType, get_hostname
from app.core.research import (
    Article,
    NewsClient,
    SearchParams,
    SearchResults,
    filter_articles,
    paginate,
)
from app.models.content_item import ContentItem

logger = structlog.get_logger()


ARCHIVE_SCAN_LIMIT = 500


def _item_to_article(item: ContentItem) -> Article:
    url = item.url or ""
    published = item.published_at or item.created_at
    return Article(
        id=str(item.id),
        title=item.title,
        description=item.description or (item.content or "")[:280],
        source=get_hostname(url) if url else "Upload",
        url=url or item.preview_url or "",
        image_url=item.preview_url if item.preview_url != url else None,
        published_at=published.isoformat() if published else "",
    )


async def search_archive(session: AsyncSession, params: SearchParams) -> SearchResults:
    """Search saved articles by tag and free text."""
    result = await session.execute(
        select(ContentItem)
        .where(ContentItem.content_type == ContentType.ARTICLE.value)
        .order_by(desc(ContentItem.created_at))
        .limit(ARCHIVE_SCAN_LIMIT)
    )
    articles = [_item_to_article(item) for item in result.scalars().all()]
    return paginate(
        filter_articles(articles, params.tags, params.query),
        params.page,
        params.page_size
    )


async def search_articles(
    session: AsyncSession,
    params: SearchParams,
    news_client: Optional[NewsClient] = None
) -> SearchResults:
    """
    Find articles for the research page.

    Uses the news feed when an API key is configured and falls back to the
    local archive when it is not, or when the feed is unreachable.
    """
    if news_client is not None and news_client.is_configured:
        try:
            return await news_client.fetch_articles(params)
        except httpx.HTTPError as e:
            logger.warning("News feed unavailable, searching archive", error=str(e))

    return await search_archive(session, params)
