"""Content item API endpoints"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID
import structlog

from app.config import settings
from app.core.content_detection import ContentType
from app.core.database import get_db
from app.core.exceptions import (
    ExtractionError,
    InvalidURLError,
    NotFoundError,
    StorageError,
    UnknownContentTypeError,
)
from app.core.extraction import ContentExtractor
from app.core.storage import ObjectStorage, get_storage
from app.schemas.content import (
    ContentFromUrlRequest,
    ContentItemDetail,
    ContentItemResponse,
    ManualContentType,
    TargetType,
)
from app.schemas.output import ContentOutputResponse
from app.services import content_service
from app.utils.validators import sanitize_filename, validate_upload_size

router = APIRouter()
logger = structlog.get_logger()

UPLOAD_CHUNK_SIZE = 1024 * 1024


@router.post("/upload", response_model=ContentItemResponse, status_code=status.HTTP_201_CREATED)
async def upload_content(
    file: UploadFile = File(...),
    content_type: Optional[ManualContentType] = Form(None),
    target_type: Optional[TargetType] = Form(None),
    user_id: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage)
):
    """Upload an article, video or audio file"""
    too_large = HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail="File is empty or exceeds the upload size limit"
    )
    if file.size is not None and not validate_upload_size(file.size):
        raise too_large

    limit = settings.max_upload_size_mb * 1024 * 1024
    chunks = []
    received = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        received += len(chunk)
        if received > limit:
            raise too_large
        chunks.append(chunk)
    data = b"".join(chunks)

    if not validate_upload_size(len(data)):
        raise too_large

    try:
        return await content_service.create_content_from_upload(
            db,
            storage,
            data=data,
            filename=sanitize_filename(file.filename or "upload") or "upload",
            mime_type=file.content_type,
            content_type=ContentType(content_type) if content_type else None,
            target_type=target_type,
            user_id=user_id
        )
    except (UnknownContentTypeError, ExtractionError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("Upload failed", filename=file.filename, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/url", response_model=ContentItemResponse, status_code=status.HTTP_201_CREATED)
async def add_content_from_url(
    request: ContentFromUrlRequest,
    db: AsyncSession = Depends(get_db)
):
    """Link content by URL; article pages are fetched and their text extracted"""
    try:
        async with ContentExtractor() as extractor:
            return await content_service.create_content_from_url(
                db,
                extractor,
                raw_url=request.url,
                content_type=ContentType(request.content_type) if request.content_type else None,
                target_type=request.target_type,
                user_id=request.user_id
            )
    except (InvalidURLError, UnknownContentTypeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/", response_model=List[ContentItemResponse])
async def list_content(
    user_id: Optional[str] = Query(None),
    content_type: Optional[ManualContentType] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """List content items, newest first"""
    return await content_service.list_content_items(db, user_id, content_type, skip, limit)


@router.get("/{content_id}", response_model=ContentItemDetail)
async def get_content(
    content_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get a content item with its extracted text"""
    try:
        return await content_service.get_content_item(db, content_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content(
    content_id: UUID,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage)
):
    """Delete a content item, its jobs, its outputs and its stored file"""
    try:
        await content_service.delete_content_item(db, storage, content_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return None


@router.get("/{content_id}/outputs", response_model=List[ContentOutputResponse])
async def list_outputs(
    content_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """List generated outputs for a content item"""
    try:
        return await content_service.list_content_outputs(db, content_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
