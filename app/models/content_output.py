"""Content output database model"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.core.database import Base, JSONVariant


class ContentOutput(Base):
    """Generated outputs for a content item"""
    __tablename__ = "content_outputs"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    output_type = Column(String(50), nullable=False)  # text / audio / video
    target_format = Column(String(50), nullable=False)
    processed_content = Column(Text, nullable=True)
    media_url = Column(Text, nullable=True)
    options = Column(JSONVariant, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    content_item = relationship("ContentItem", back_populates="outputs")

    def __repr__(self):
        return f"<ContentOutput {self.id} ({self.target_format})>"
