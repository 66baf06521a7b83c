"""Content item database model"""

from sqlalchemy import Column, String, Text, DateTime, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum

from app.core.content_detection import ContentType  # noqa: F401
from app.core.database import Base, JSONVariant


class ContentStatus(str, enum.Enum):
    PENDING = "pending"
    READY = "ready"
    PROCESSED = "processed"
    FAILED = "failed"


class ContentItem(Base):
    """Content items: uploaded files and linked URLs"""
    __tablename__ = "content_items"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(255), nullable=True, index=True)
    title = Column(Text, nullable=False)
    content_type = Column(String(20), nullable=False, index=True)
    target_type = Column(String(20), nullable=True)  # audio / video, articles only
    status = Column(String(20), default=ContentStatus.PENDING.value)
    file_path = Column(Text, nullable=True)
    url = Column(Text, nullable=True)
    preview_url = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    author = Column(String(255), nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    processed_content = Column(JSONVariant, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    # Relationships
    outputs = relationship(
        "ContentOutput",
        back_populates="content_item",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    processing_jobs = relationship(
        "ProcessingJob",
        foreign_keys="ProcessingJob.content_id",
        back_populates="content_item",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        Index("idx_content_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<ContentItem {self.id} ({self.content_type})>"
