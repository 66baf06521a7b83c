"""System status API endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import settings
from app.core.database import get_db
from app.core.storage import ObjectStorage, get_storage
from app.services.content_service import check_connection

router = APIRouter()
logger = structlog.get_logger()


@router.get("/connection")
async def connection_status(
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage)
):
    """Report whether the database and object store are reachable"""
    database_ok = await check_connection(db)
    storage_ok = await storage.check()

    if not (database_ok and storage_ok):
        logger.warning("Backend connection degraded", database=database_ok, storage=storage_ok)

    return {
        "connected": database_ok and storage_ok,
        "database": database_ok,
        "storage": storage_ok,
        "storage_type": settings.storage_type,
        "llm_configured": bool(settings.openai_api_key),
    }
