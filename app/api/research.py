"""Research API endpoints"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.research import NewsClient, SearchParams
from app.schemas.research import SearchResultsResponse
from app.services.research_service import search_articles

router = APIRouter()


@router.get("/articles", response_model=SearchResultsResponse)
async def search_research_articles(
    tags: List[str] = Query(default=[]),
    q: str = Query("", max_length=200),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
):
    """Search articles by tag and free text"""
    params = SearchParams(tags=tags, query=q, page=page, page_size=page_size)

    async with NewsClient() as news_client:
        results = await search_articles(db, params, news_client)

    return asdict(results)
