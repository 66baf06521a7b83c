"""Processing queue: job records, the transformation run and live updates."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, List, Optional, Union
from uuid import UUID

import structlog
from sqlalchemy import select, desc, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.core.audio import TTSService
from app.core.exceptions import JobStateError, NotFoundError
from app.core.repurposer import ContentRepurposer, parse_social_posts
from app.models.content_item import ContentItem, ContentStatus
from app.models.content_output import ContentOutput
from app.models.processing_job import JobStatus, ProcessingJob
from app.schemas.job import JobEvent, ProcessingOptions, QueueItem, TargetFormat
from app.utils.job_logger import add_job_log

logger = structlog.get_logger()


PROGRESS_BY_STATUS = {
    JobStatus.COMPLETED.value: 100,
    JobStatus.PROCESSING.value: 50,
}


CLAIMABLE_STATUSES = (JobStatus.PENDING.value, JobStatus.FAILED.value)


def job_progress(status: str) -> int:
    return PROGRESS_BY_STATUS.get(status, 0)


def _as_uuid(value: Union[str, UUID]) -> UUID:
    return UUID(value) if isinstance(value, str) else value


async def create_processing_job(
    session: AsyncSession,
    content_id: UUID,
    options: ProcessingOptions,
    source_content_id: Optional[UUID] = None,
    previous_transformation_id: Optional[UUID] = None
) -> ProcessingJob:
    """
    Queue a transformation of a content item.

    Raises:
        NotFoundError: the content item does not exist
    """
    item = await session.get(ContentItem, content_id)
    if item is None:
        raise NotFoundError(f"Content item {content_id} not found")

    job = ProcessingJob(
        content_id=content_id,
        source_content_id=source_content_id,
        previous_transformation_id=previous_transformation_id,
        target_format=options.target_format,
        status=JobStatus.PENDING.value,
        options=options.model_dump(),
        logs=[]
    )
    session.add(job)
    await session.flush()
    await add_job_log(
        session,
        job.id,
        "info",
        "Job queued",
        {"target_format": options.target_format}
    )
    await session.commit()
    await session.refresh(job)

    logger.info(
        "Created processing job",
        job_id=str(job.id),
        content_id=str(content_id),
        target_format=options.target_format
    )
    return job


async def get_processing_job(session: AsyncSession, job_id: Union[str, UUID]) -> ProcessingJob:
    job = await session.get(ProcessingJob, _as_uuid(job_id))
    if job is None:
        raise NotFoundError(f"Job {job_id} not found")
    return job


async def list_processing_jobs(
    session: AsyncSession,
    user_id: Optional[str] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 50
) -> List[QueueItem]:
    """Queue view: each job with its content title and source type, newest first."""
    query = (
        select(ProcessingJob, ContentItem.title, ContentItem.content_type)
        .outerjoin(ContentItem, ProcessingJob.content_id == ContentItem.id)
        .order_by(desc(ProcessingJob.created_at))
    )
    if user_id:
        query = query.where(ContentItem.user_id == user_id)
    if status:
        query = query.where(ProcessingJob.status == status)

    result = await session.execute(query.offset(skip).limit(limit))

    queue = [
        QueueItem(
            id=job.id,
            title=title or "Untitled",
            source_type=content_type or "unknown",
            target_format=job.target_format or "unknown",
            progress=job_progress(job.status),
            status=job.status,
            error=job.error,
            content_id=job.content_id
        )
        for job, title, content_type in result.all()
    ]
    logger.debug("Retrieved processing jobs", count=len(queue))
    return queue


async def _resolve_source_text(
    session: AsyncSession,
    job: ProcessingJob,
    item: ContentItem
) -> str:
    """
    Pick the text to transform.

    A chained job transforms its previous output; otherwise the source item
    (when given) or the content item itself supplies the text. Items without
    extracted text fall back to their title and description.
    """
    if job.previous_transformation_id:
        previous = await session.get(ContentOutput, job.previous_transformation_id)
        if previous is not None and previous.processed_content:
            return previous.processed_content

    source = item
    if job.source_content_id and job.source_content_id != item.id:
        source = await session.get(ContentItem, job.source_content_id) or item

    if source.content:
        return source.content

    return "\n\n".join(part for part in (source.title, source.description) if part)


async def process_job(
    session: AsyncSession,
    job_id: Union[str, UUID],
    repurposer: Optional[ContentRepurposer] = None,
    tts: Optional[TTSService] = None
) -> ProcessingJob:
    """
    Run one transformation job to completion.

    Claims the job by moving it from ``pending`` or ``failed`` to
    ``processing``, calls the language model, stores a ``content_outputs``
    row and marks the job ``completed``. On any error the job is marked
    ``failed`` with the error message and the error is re-raised. Jobs that
    cannot be claimed (completed, or already claimed by another worker) are
    returned untouched.
    """
    job_id = _as_uuid(job_id)
    job = await get_processing_job(session, job_id)

    claimed = await session.execute(
        update(ProcessingJob)
        .where(ProcessingJob.id == job_id)
        .where(ProcessingJob.status.in_(CLAIMABLE_STATUSES))
        .values(status=JobStatus.PROCESSING.value, error=None)
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount == 0:
        await session.rollback()
        await session.refresh(job)
        logger.info("Job not claimable", job_id=str(job_id), status=job.status)
        return job

    await add_job_log(session, job_id, "info", "Processing started")
    await session.commit()
    await session.refresh(job)

    try:
        options = ProcessingOptions.model_validate(job.options or {"target_format": job.target_format})

        item = await session.get(ContentItem, job.content_id) if job.content_id else None
        if item is None:
            raise NotFoundError("Content item not found")

        if options.method == "manual":
            output_text = options.sample_output or ""
        else:
            source_text = await _resolve_source_text(session, job, item)
            output_text = await (repurposer or ContentRepurposer()).process_text(
                source_text, options
            )

        media_url = None
        output_type = "text"
        if options.target_format == TargetFormat.AUDIO_PODCAST.value:
            audio = await (tts or TTSService()).generate_audio(output_text)
            media_url = audio.audio_url
            output_type = "audio"

        output = ContentOutput(
            content_id=item.id,
            output_type=output_type,
            target_format=options.target_format,
            processed_content=output_text,
            media_url=media_url,
            options=job.options
        )
        session.add(output)
        await session.flush()

        processed = {
            "title": f"Transformed: {item.title}",
            "content": output_text,
            "format": options.target_format,
            "output_id": str(output.id),
        }
        if media_url:
            processed["media_url"] = media_url
        if options.target_format == TargetFormat.SOCIAL_POSTS.value:
            posts = parse_social_posts(output_text)
            if posts is not None:
                processed["posts"] = posts

        job.result = processed
        job.status = JobStatus.COMPLETED.value
        job.completed_at = datetime.now(timezone.utc)
        item.processed_content = processed
        item.status = ContentStatus.PROCESSED.value

        await add_job_log(
            session,
            job_id,
            "success",
            "Processing completed",
            {"output_id": str(output.id), "chars": len(output_text)}
        )
        await session.commit()

    except Exception as e:
        logger.error("Error processing content", job_id=str(job_id), error=str(e))
        await session.rollback()
        await session.execute(
            update(ProcessingJob)
            .where(ProcessingJob.id == job_id)
            .values(status=JobStatus.FAILED.value, error=str(e))
        )
        await add_job_log(session, job_id, "error", "Processing failed", {"error": str(e)})
        await session.commit()
        raise

    await session.refresh(job)
    logger.info("Processing job completed", job_id=str(job_id))
    return job


async def retry_job(session: AsyncSession, job_id: Union[str, UUID]) -> ProcessingJob:
    """
    Reset a failed job to pending.

    Raises:
        JobStateError: the job has not failed
    """
    job = await get_processing_job(session, job_id)
    if job.status != JobStatus.FAILED.value:
        raise JobStateError("Only failed jobs can be retried")

    job.status = JobStatus.PENDING.value
    job.error = None
    await add_job_log(session, job.id, "info", "Job re-queued")
    await session.commit()
    await session.refresh(job)
    return job


async def delete_job(session: AsyncSession, job_id: Union[str, UUID]) -> None:
    job = await get_processing_job(session, job_id)
    await session.delete(job)
    await session.commit()


async def find_stale_jobs(session: AsyncSession, older_than_minutes: int = None) -> List[UUID]:
    """Ids of jobs still pending after the staleness threshold."""
    minutes = older_than_minutes or settings.stale_job_minutes
    cutoff = datetime.now(timezone.utc) - timedelta(minutes=minutes)
    result = await session.execute(
        select(ProcessingJob.id)
        .where(ProcessingJob.status == JobStatus.PENDING.value)
        .where(ProcessingJob.created_at < cutoff)
    )
    return list(result.scalars().all())


def to_event(job: ProcessingJob) -> JobEvent:
    return JobEvent(
        id=job.id,
        status=job.status,
        progress=job_progress(job.status),
        error=job.error,
        result=job.result,
        updated_at=job.updated_at
    )


async def watch_job(
    session_factory: async_sessionmaker,
    job_id: Union[str, UUID],
    interval: float = None
) -> AsyncIterator[JobEvent]:
    """
    Yield a snapshot of the job whenever its status or payload changes.

    Polls the jobs table with a fresh session each time and stops after
    yielding a terminal status.

    Raises:
        NotFoundError: the job does not exist (or was deleted mid-watch)
    """
    job_id = _as_uuid(job_id)
    interval = interval if interval is not None else settings.job_events_interval_seconds
    last_seen = None

    while True:
        async with session_factory() as session:
            job = await get_processing_job(session, job_id)
            event = to_event(job)

        snapshot = (event.status, event.error, event.updated_at)
        if snapshot != last_seen:
            last_seen = snapshot
            yield event

        if job.is_terminal:
            return

        await asyncio.sleep(interval)
