"""Processing job Pydantic schemas"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Dict, Any
from datetime import datetime
from uuid import UUID
from enum import Enum


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class TargetFormat(str, Enum):
    SOCIAL_POSTS = "social-posts"
    BLOG_ARTICLE = "blog-article"
    NEWSLETTER = "newsletter"
    VIDEO_SCRIPT = "video-script"
    PODCAST_SCRIPT = "podcast-script"
    INFOGRAPHIC = "infographic"
    AUDIO_PODCAST = "audio-podcast"
    VIDEO_CONTENT = "video-content"


Tone = Literal["professional", "casual", "friendly", "humorous", "formal"]


class ProcessingOptions(BaseModel):
    """Options that drive prompt assembly for a transformation"""
    content_type: str = Field(default="article", min_length=1, max_length=50)
    target_format: str = Field(..., min_length=1, max_length=50)
    tone: Tone = "professional"
    length: int = Field(default=100, ge=1, le=500)  # percent of original length
    preserve_key_points: bool = True
    platforms: List[str] = Field(default_factory=list)
    custom_instructions: str = Field(default="", max_length=2000)
    method: Literal["ai", "manual"] = "ai"
    target_type: Optional[Literal["audio", "video"]] = None
    sample_output: Optional[str] = Field(default=None, max_length=5000)

    class Config:
        json_schema_extra = {
            "example": {
                "content_type": "article",
                "target_format": "social-posts",
                "tone": "professional",
                "length": 50,
                "preserve_key_points": True,
                "platforms": ["instagram", "twitter"]
            }
        }


class JobCreate(BaseModel):
    """Schema for queueing a transformation"""
    content_id: UUID
    options: ProcessingOptions
    source_content_id: Optional[UUID] = None
    previous_transformation_id: Optional[UUID] = None


class JobResponse(BaseModel):
    """Schema for job response"""
    id: UUID
    content_id: Optional[UUID] = None
    source_content_id: Optional[UUID] = None
    previous_transformation_id: Optional[UUID] = None
    target_format: str
    status: str
    options: Optional[Dict[str, Any]] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QueueItem(BaseModel):
    """Row of the processing queue view"""
    id: UUID
    title: str
    source_type: str
    target_format: str
    progress: int = Field(ge=0, le=100)
    status: str
    error: Optional[str] = None
    content_id: Optional[UUID] = None


class JobEvent(BaseModel):
    """Snapshot pushed to job watchers whenever the row changes"""
    id: UUID
    status: str
    progress: int
    error: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None
