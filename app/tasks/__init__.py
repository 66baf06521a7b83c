"""Celery tasks package"""

from app.tasks.processing_tasks import process_job, requeue_stale_jobs

__all__ = [
    "process_job",
    "requeue_stale_jobs",
]
