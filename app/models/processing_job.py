"""Processing job database model"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum

from app.core.database import Base, JSONVariant


class JobStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = (JobStatus.COMPLETED.value, JobStatus.FAILED.value)


class ProcessingJob(Base):
    """Processing jobs: the transformation queue"""
    __tablename__ = "processing_jobs"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    source_content_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("content_items.id", ondelete="SET NULL"),
        nullable=True
    )
    previous_transformation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("content_outputs.id", ondelete="SET NULL"),
        nullable=True
    )
    target_format = Column(String(50), nullable=False)
    status = Column(String(20), default=JobStatus.PENDING.value, index=True)
    options = Column(JSONVariant, nullable=True)
    result = Column(JSONVariant, nullable=True)
    error = Column(Text, nullable=True)
    logs = Column(JSONVariant, nullable=True, default=list)  # Array of log entries
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    content_item = relationship(
        "ContentItem",
        foreign_keys=[content_id],
        back_populates="processing_jobs"
    )

    __table_args__ = (
        Index("idx_job_status_created", "status", "created_at"),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def __repr__(self):
        return f"<ProcessingJob {self.id} ({self.status})>"
