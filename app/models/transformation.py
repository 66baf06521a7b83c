"""Transformation database model"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.sql import func
import uuid

from app.core.database import Base


class Transformation(Base):
    """User-saved transformations of a content item"""
    __tablename__ = "transformations"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content_item_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    user_id = Column(String(255), nullable=True, index=True)
    output_format = Column(String(50), nullable=False)
    result = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self):
        return f"<Transformation {self.id} ({self.output_format})>"
