"""Processing Celery tasks for content transformation jobs."""

import structlog

from workers.celery_app import celery_app
from app.core.database import create_worker_session_maker
from app.core.exceptions import RepurposerError
from app.utils.async_utils import run_async

logger = structlog.get_logger()


@celery_app.task(
    bind=True,
    name="processing.process_job",
    max_retries=3,
    default_retry_delay=30
)
def process_job(self, job_id: str):
    """
    Run a queued transformation job.

    The job row carries everything needed: the content item, the target
    format and the processing options. Application errors leave the job
    ``failed`` and are final; only infrastructure errors (database, broker)
    are retried by Celery.

    Args:
        job_id: ProcessingJob UUID
    """

    async def _process():
        from app.services.processing_service import process_job as run_job

        session_maker = create_worker_session_maker()
        async with session_maker() as session:
            job = await run_job(session, job_id)
            return {
                "job_id": job_id,
                "status": job.status,
                "output_id": (job.result or {}).get("output_id"),
            }

    try:
        return run_async(_process())
    except RepurposerError as e:
        # Final; the job is already marked failed
        logger.error("Processing job failed", job_id=job_id, error=str(e))
        return {"job_id": job_id, "status": "failed", "error": str(e)}
    except Exception as e:
        logger.error("Processing job error", job_id=job_id, error=str(e))
        raise self.retry(exc=e)


@celery_app.task(name="processing.requeue_stale_jobs")
def requeue_stale_jobs(older_than_minutes: int = None):
    """
    Re-enqueue jobs stuck in ``pending``.

    Covers jobs whose enqueue was lost, for example when the broker was
    down at creation time.
    """

    async def _find():
        from app.services.processing_service import find_stale_jobs

        session_maker = create_worker_session_maker()
        async with session_maker() as session:
            return await find_stale_jobs(session, older_than_minutes)

    job_ids = run_async(_find())
    for job_id in job_ids:
        process_job.delay(str(job_id))

    if job_ids:
        logger.info("Re-enqueued stale jobs", count=len(job_ids))

    return {"requeued": len(job_ids)}
