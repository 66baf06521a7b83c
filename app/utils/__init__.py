"""Utility functions package"""

from app.utils.job_logger import add_job_log, get_job_logs
from app.utils.validators import (
    sanitize_filename,
    validate_platform,
    validate_processing_options,
    validate_upload_size
)
from app.utils.async_utils import run_async

__all__ = [
    "add_job_log",
    "get_job_logs",
    "sanitize_filename",
    "validate_platform",
    "validate_processing_options",
    "validate_upload_size",
    "run_async"
]
