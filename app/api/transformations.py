"""Saved transformation API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from typing import List, Optional
from uuid import UUID

from app.core.database import get_db
from app.models.content_item import ContentItem
from app.models.transformation import Transformation
from app.schemas.output import (
    TransformationCreate,
    TransformationResponse,
    TransformationUpdate,
)

router = APIRouter()


async def _get_transformation(db: AsyncSession, transformation_id: UUID) -> Transformation:
    transformation = await db.get(Transformation, transformation_id)
    if not transformation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transformation {transformation_id} not found"
        )
    return transformation


@router.post("/", response_model=TransformationResponse, status_code=status.HTTP_201_CREATED)
async def create_transformation(
    data: TransformationCreate,
    db: AsyncSession = Depends(get_db)
):
    """Save a transformation"""
    if data.content_item_id and not await db.get(ContentItem, data.content_item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Content item {data.content_item_id} not found"
        )

    transformation = Transformation(**data.model_dump())
    db.add(transformation)
    await db.commit()
    await db.refresh(transformation)
    return transformation


@router.get("/", response_model=List[TransformationResponse])
async def list_transformations(
    user_id: Optional[str] = Query(None),
    content_item_id: Optional[UUID] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """List saved transformations, newest first"""
    query = select(Transformation).order_by(desc(Transformation.created_at))

    if user_id:
        query = query.where(Transformation.user_id == user_id)
    if content_item_id:
        query = query.where(Transformation.content_item_id == content_item_id)

    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{transformation_id}", response_model=TransformationResponse)
async def get_transformation(
    transformation_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    return await _get_transformation(db, transformation_id)


@router.patch("/{transformation_id}", response_model=TransformationResponse)
async def update_transformation(
    transformation_id: UUID,
    update: TransformationUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a saved transformation's result or status"""
    transformation = await _get_transformation(db, transformation_id)

    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(transformation, field, value)

    await db.commit()
    await db.refresh(transformation)
    return transformation


@router.delete("/{transformation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transformation(
    transformation_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    transformation = await _get_transformation(db, transformation_id)
    await db.delete(transformation)
    await db.commit()
    return None
