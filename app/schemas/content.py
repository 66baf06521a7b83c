"""Content item Pydantic schemas"""

from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict, Any
from datetime import datetime
from uuid import UUID


ManualContentType = Literal["article", "video", "podcast"]
TargetType = Literal["audio", "video"]


class ContentFromUrlRequest(BaseModel):
    """Schema for linking content by URL"""
    url: str = Field(..., min_length=1, max_length=2048)
    content_type: Optional[ManualContentType] = None
    target_type: Optional[TargetType] = None
    user_id: Optional[str] = Field(default=None, max_length=255)

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                "user_id": "user-123"
            }
        }


class ContentItemResponse(BaseModel):
    """Schema for content item response"""
    id: UUID
    user_id: Optional[str] = None
    title: str
    content_type: str
    target_type: Optional[str] = None
    status: Optional[str] = None
    file_path: Optional[str] = None
    url: Optional[str] = None
    preview_url: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    published_at: Optional[datetime] = None
    processed_content: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContentItemDetail(ContentItemResponse):
    """Content item including the extracted text"""
    content: Optional[str] = None
