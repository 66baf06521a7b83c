"""Utility for logging job activities to the database."""

from datetime import datetime, timezone
from typing import Optional, Dict, Any, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
import uuid
import structlog

from app.models.processing_job import ProcessingJob

logger = structlog.get_logger()


def _as_uuid(job_id: Union[str, uuid.UUID]) -> uuid.UUID:
    return uuid.UUID(job_id) if isinstance(job_id, str) else job_id


async def add_job_log(
    session: AsyncSession,
    job_id: Union[str, uuid.UUID],
    level: str,  # 'info', 'warning', 'error', 'success'
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """
    Append a log entry to a job's logs array.

    The entry is flushed but not committed; it lands with the caller's next
    commit. Database errors are logged and swallowed so a failing audit
    trail never fails the job itself.
    """
    job_id = _as_uuid(job_id)
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "message": message,
        "details": details or {}
    }

    try:
        result = await session.execute(
            select(ProcessingJob.logs).where(ProcessingJob.id == job_id)
        )
        current_logs = result.scalar_one_or_none() or []

        await session.execute(
            update(ProcessingJob)
            .where(ProcessingJob.id == job_id)
            .values(logs=current_logs + [log_entry])
            .execution_options(synchronize_session="fetch")
        )
    except SQLAlchemyError as e:
        logger.warning("Failed to add job log", job_id=str(job_id), error=str(e))


async def get_job_logs(session: AsyncSession, job_id: Union[str, uuid.UUID]) -> list:
    """Get all logs for a job."""
    result = await session.execute(
        select(ProcessingJob.logs).where(ProcessingJob.id == _as_uuid(job_id))
    )
    return result.scalar_one_or_none() or []
