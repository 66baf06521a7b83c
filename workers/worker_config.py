"""Celery worker configuration and customization"""

from celery.signals import (
    worker_ready,
    worker_shutdown,
    task_prerun,
    task_postrun,
    task_failure,
)
import structlog
import os

logger = structlog.get_logger()


@worker_ready.connect
def on_worker_ready(sender, **kwargs):
    """Called when the worker is ready to receive tasks"""
    logger.info(
        "Celery worker ready",
        hostname=sender.hostname,
        pid=os.getpid()
    )


@worker_shutdown.connect
def on_worker_shutdown(sender, **kwargs):
    """Called when the worker is shutting down"""
    logger.info(
        "Celery worker shutting down",
        hostname=sender.hostname
    )


@task_prerun.connect
def on_task_prerun(task_id, task, args, kwargs, **_):
    """Called before a task is executed"""
    logger.info(
        "Task starting",
        task_id=task_id,
        task_name=task.name,
        job_id=(args[0] if args else (kwargs or {}).get("job_id"))
    )


@task_postrun.connect
def on_task_postrun(task_id, task, args, kwargs, retval, state, **_):
    """Called after a task is executed"""
    logger.info(
        "Task completed",
        task_id=task_id,
        task_name=task.name,
        state=state
    )


@task_failure.connect
def on_task_failure(task_id, exception, sender=None, **_):
    """Called when a task raises"""
    logger.error(
        "Task failed",
        task_id=task_id,
        task_name=getattr(sender, "name", None),
        error=str(exception)
    )


# Worker pool settings per queue
WORKER_CONFIGS = {
    "default": {
        "concurrency": 2,
        "pool": "prefork",
        "loglevel": "INFO",
    },
    "processing": {
        "concurrency": 4,  # Bound by LLM rate limits
        "pool": "prefork",
        "loglevel": "INFO",
        "queues": ["processing"],
    },
}


def get_worker_config(worker_type: str = "default") -> dict:
    """Get worker configuration by type"""
    return WORKER_CONFIGS.get(worker_type, WORKER_CONFIGS["default"])
