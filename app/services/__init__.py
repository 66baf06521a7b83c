"""Service layer package"""

from app.services.content_service import (
    create_content_from_upload,
    create_content_from_url,
    list_content_items,
    get_content_item,
    delete_content_item,
    list_content_outputs,
    check_connection,
)
from app.services.processing_service import (
    create_processing_job,
    list_processing_jobs,
    get_processing_job,
    process_job,
    retry_job,
    delete_job,
    find_stale_jobs,
    watch_job,
)
from app.services.research_service import search_articles

__all__ = [
    "create_content_from_upload",
    "create_content_from_url",
    "list_content_items",
    "get_content_item",
    "delete_content_item",
    "list_content_outputs",
    "check_connection",
    "create_processing_job",
    "list_processing_jobs",
    "get_processing_job",
    "process_job",
    "retry_job",
    "delete_job",
    "find_stale_jobs",
    "watch_job",
    "search_articles",
]
