"""Database models package"""

from app.models.content_item import ContentItem, ContentType, ContentStatus
from app.models.processing_job import ProcessingJob, JobStatus
from app.models.content_output import ContentOutput
from app.models.transformation import Transformation

__all__ = [
    "ContentItem",
    "ContentType",
    "ContentStatus",
    "ProcessingJob",
    "JobStatus",
    "ContentOutput",
    "Transformation"
]
