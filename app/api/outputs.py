"""Generated output API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.core.database import get_db
from app.models.content_output import ContentOutput
from app.schemas.output import ContentOutputResponse, ContentOutputUpdate

router = APIRouter()


async def _get_output(db: AsyncSession, output_id: UUID) -> ContentOutput:
    output = await db.get(ContentOutput, output_id)
    if not output:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Output {output_id} not found"
        )
    return output


@router.get("/{output_id}", response_model=ContentOutputResponse)
async def get_output(
    output_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get a generated output"""
    return await _get_output(db, output_id)


@router.patch("/{output_id}", response_model=ContentOutputResponse)
async def update_output(
    output_id: UUID,
    update: ContentOutputUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Save manual edits to a generated output"""
    output = await _get_output(db, output_id)
    output.processed_content = update.processed_content

    await db.commit()
    await db.refresh(output)
    return output
