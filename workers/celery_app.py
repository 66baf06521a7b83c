"""Celery application configuration"""

from celery import Celery
from kombu import Queue
import os

# Import settings - handle both standalone worker and app context
try:
    from app.config import settings
    broker_url = settings.celery_broker_url
    result_backend = settings.celery_result_backend
    stale_check_interval = settings.stale_job_minutes * 60.0
except ImportError:
    broker_url = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/1")
    result_backend = os.environ.get("CELERY_RESULT_BACKEND", "redis://localhost:6379/2")
    stale_check_interval = 1800.0

# Initialize Celery
celery_app = Celery(
    "content_repurposer",
    broker=broker_url,
    backend=result_backend,
    include=[
        "app.tasks.processing_tasks",
    ]
)

# Celery configuration
celery_app.conf.update(
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",

    # Time settings
    timezone="UTC",
    enable_utc=True,

    # Task tracking
    task_track_started=True,
    task_time_limit=900,  # 15 minutes max per task
    task_soft_time_limit=780,

    # Worker settings
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,

    # Task acknowledgment
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Results
    result_expires=86400,  # 24 hours

    # Task routing
    task_routes={
        "processing.*": {"queue": "processing"},
    },

    task_queues=(
        Queue("default", routing_key="default"),
        Queue("processing", routing_key="processing"),
    ),

    task_default_queue="default",
)

# Worker lifecycle logging
import workers.worker_config  # noqa: E402,F401

# Celery beat schedule for periodic tasks
celery_app.conf.beat_schedule = {
    "requeue-stale-jobs": {
        "task": "processing.requeue_stale_jobs",
        "schedule": stale_check_interval,
    },
}


@celery_app.task(bind=True, name="celery.ping")
def ping(self):
    """Simple ping task to test worker connectivity"""
    return "pong"


if __name__ == "__main__":
    celery_app.start()
