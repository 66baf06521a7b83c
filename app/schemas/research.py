"""Research article Pydantic schemas"""

from pydantic import BaseModel, Field
from typing import Optional, List


class ArticleResponse(BaseModel):
    id: str
    title: str
    description: str = ""
    source: str = ""
    url: str
    image_url: Optional[str] = None
    published_at: str = ""

    class Config:
        from_attributes = True


class SearchResultsResponse(BaseModel):
    articles: List[ArticleResponse]
    total_results: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_pages: int = Field(ge=0)
