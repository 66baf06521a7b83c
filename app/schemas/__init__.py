"""Pydantic schemas package"""

from app.schemas.job import (
    JobCreate,
    JobResponse,
    JobStatus,
    JobEvent,
    ProcessingOptions,
    QueueItem,
    TargetFormat
)
from app.schemas.content import (
    ContentFromUrlRequest,
    ContentItemResponse,
    ContentItemDetail
)
from app.schemas.output import (
    ContentOutputResponse,
    ContentOutputUpdate,
    TransformationCreate,
    TransformationUpdate,
    TransformationResponse
)
from app.schemas.research import ArticleResponse, SearchResultsResponse

__all__ = [
    "JobCreate",
    "JobResponse",
    "JobStatus",
    "JobEvent",
    "ProcessingOptions",
    "QueueItem",
    "TargetFormat",
    "ContentFromUrlRequest",
    "ContentItemResponse",
    "ContentItemDetail",
    "ContentOutputResponse",
    "ContentOutputUpdate",
    "TransformationCreate",
    "TransformationUpdate",
    "TransformationResponse",
    "ArticleResponse",
    "SearchResultsResponse"
]
