"""Tests for research article search."""

import httpx
import pytest
from unittest.mock import AsyncMock


def _article(i, title, description=""):
    from app.core.research import Article

    return Article(id=str(i), title=title, description=description, url=f"https://news.example.com/{i}")


class TestFiltering:
    """Tests for filter_articles and paginate"""

    def test_tags_match_any(self):
        from app.core.research import filter_articles

        articles = [
            _article(1, "AI in marketing"),
            _article(2, "Gardening tips", "Grow tomatoes"),
            _article(3, "Weekly roundup", "Latest on SEO"),
        ]

        result = filter_articles(articles, tags=["ai", "seo"])

        assert [a.id for a in result] == ["1", "3"]

    def test_query_is_case_insensitive(self):
        from app.core.research import filter_articles

        articles = [_article(1, "Content Strategy 101"), _article(2, "Recipes")]

        assert [a.id for a in filter_articles(articles, query="STRATEGY")] == ["1"]

    def test_no_filters_returns_everything(self):
        from app.core.research import filter_articles

        articles = [_article(1, "One"), _article(2, "Two")]

        assert filter_articles(articles) == articles

    def test_paginate(self):
        from app.core.research import paginate

        articles = [_article(i, f"Article {i}") for i in range(23)]

        page = paginate(articles, page=3, page_size=10)

        assert page.total_results == 23
        assert page.total_pages == 3
        assert [a.id for a in page.articles] == ["20", "21", "22"]

    def test_paginate_empty(self):
        from app.core.research import paginate

        page = paginate([], page=1, page_size=10)

        assert page.total_pages == 0
        assert page.articles == []


class TestNewsClient:
    """Tests for NewsClient"""

    def test_not_configured_without_key(self):
        from app.core.research import NewsClient

        assert NewsClient(api_key="").is_configured is False

    @pytest.mark.asyncio
    async def test_fetch_articles(self):
        from app.core.research import NewsClient, SearchParams

        payload = {
            "articles": [
                {
                    "title": "Video marketing trends",
                    "description": "What works now",
                    "url": "https://news.example.com/a",
                    "urlToImage": "https://news.example.com/a.png",
                    "publishedAt": "2024-05-01T00:00:00Z",
                    "source": {"name": "Example News"},
                },
                {"title": "Unrelated", "description": "", "url": "https://news.example.com/b"},
            ]
        }
        request = httpx.Request("GET", "https://newsapi.example.com")

        async with NewsClient(api_key="key", base_url="https://newsapi.example.com") as client:
            client.client.get = AsyncMock(
                return_value=httpx.Response(200, json=payload, request=request)
            )
            results = await client.fetch_articles(SearchParams(tags=["marketing"]))

        assert results.total_results == 1
        article = results.articles[0]
        assert article.source == "Example News"
        assert article.image_url == "https://news.example.com/a.png"
        assert client.client.get.call_args.kwargs["params"]["q"] == "marketing"


class TestSearchArticles:
    """Tests for the research service."""

    @pytest.mark.asyncio
    async def test_archive_search_without_news_key(self, db_session, content_item):
        from app.core.research import NewsClient, SearchParams
        from app.services.research_service import search_articles

        results = await search_articles(
            db_session,
            SearchParams(query="newsletter"),
            NewsClient(api_key="")
        )

        assert results.total_results == 1
        assert results.articles[0].id == str(content_item.id)
        assert results.articles[0].source == "blog.example.com"
        assert results.articles[0].url == "https://blog.example.com/grow"

    @pytest.mark.asyncio
    async def test_falls_back_to_archive_on_feed_error(self, db_session, content_item):
        from app.core.research import NewsClient, SearchParams
        from app.services.research_service import search_articles

        news_client = NewsClient(api_key="key")
        news_client.fetch_articles = AsyncMock(side_effect=httpx.ConnectError("down"))

        results = await search_articles(db_session, SearchParams(tags=["growth"]), news_client)

        assert results.total_results == 1
