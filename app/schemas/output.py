"""Output and transformation Pydantic schemas"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID


class ContentOutputResponse(BaseModel):
    """Schema for a generated output"""
    id: UUID
    content_id: UUID
    output_type: str
    target_format: str
    processed_content: Optional[str] = None
    media_url: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContentOutputUpdate(BaseModel):
    """Manual edit of a generated output"""
    processed_content: str = Field(..., min_length=1)


class TransformationCreate(BaseModel):
    content_item_id: Optional[UUID] = None
    user_id: Optional[str] = Field(default=None, max_length=255)
    output_format: str = Field(..., min_length=1, max_length=50)
    result: Optional[str] = None
    status: str = "pending"


class TransformationUpdate(BaseModel):
    result: Optional[str] = None
    status: Optional[str] = None


class TransformationResponse(BaseModel):
    id: UUID
    content_item_id: Optional[UUID] = None
    user_id: Optional[str] = None
    output_format: str
    result: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
