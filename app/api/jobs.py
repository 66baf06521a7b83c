"""Processing job API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import StreamingResponse
from kombu.exceptions import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import List, Optional
from uuid import UUID
import structlog

from app.core.database import get_db, get_session_factory
from app.core.exceptions import JobStateError, NotFoundError
from app.schemas.job import JobCreate, JobResponse, JobStatus, QueueItem
from app.services import content_service, processing_service
from app.tasks.processing_tasks import process_job
from app.utils.job_logger import get_job_logs
from app.utils.validators import validate_processing_options

router = APIRouter()
logger = structlog.get_logger()


def _enqueue(job_id: UUID) -> None:
    try:
        process_job.delay(str(job_id))
    except OperationalError as e:
        # Stale-job sweep picks it up once the broker is back
        logger.warning("Failed to enqueue job", job_id=str(job_id), error=str(e))


@router.post("/", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreate,
    db: AsyncSession = Depends(get_db)
):
    """Queue a transformation of a content item"""
    try:
        item = await content_service.get_content_item(db, job_data.content_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if "content_type" not in job_data.options.model_fields_set:
        job_data.options.content_type = item.content_type

    errors = validate_processing_options(job_data.options, item.content_type)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": errors}
        )

    job = await processing_service.create_processing_job(
        db,
        job_data.content_id,
        job_data.options,
        source_content_id=job_data.source_content_id,
        previous_transformation_id=job_data.previous_transformation_id
    )

    _enqueue(job.id)
    return job


@router.get("/", response_model=List[QueueItem])
async def list_jobs(
    user_id: Optional[str] = Query(None),
    status: Optional[JobStatus] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Processing queue, newest first"""
    return await processing_service.list_processing_jobs(
        db,
        user_id=user_id,
        status=status.value if status else None,
        skip=skip,
        limit=limit
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get detailed job information"""
    try:
        return await processing_service.get_processing_job(db, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Remove a job from the queue"""
    try:
        await processing_service.delete_job(db, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return None


@router.post("/{job_id}/retry", response_model=JobResponse)
async def retry_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Retry a failed job"""
    try:
        job = await processing_service.retry_job(db, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except JobStateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    _enqueue(job.id)
    return job


@router.get("/{job_id}/logs")
async def get_logs(
    job_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get the activity log of a job"""
    try:
        await processing_service.get_processing_job(db, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return {"job_id": str(job_id), "logs": await get_job_logs(db, job_id)}


@router.get("/{job_id}/events")
async def stream_job_events(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory)
):
    """Server-sent events with the job status until it completes or fails"""
    try:
        await processing_service.get_processing_job(db, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    async def event_stream():
        try:
            async for event in processing_service.watch_job(session_factory, job_id):
                yield f"event: job\ndata: {event.model_dump_json()}\n\n"
        except NotFoundError:
            yield "event: deleted\ndata: {}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"}
    )
