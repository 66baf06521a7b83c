"""Content item persistence: uploads, linked URLs and the archive."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select, desc, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.content_detection import (
    ContentType,
    default_title_for_url,
    detect_content_type_from_mime,
    detect_content_type_from_url,
    extract_youtube_info,
    is_pdf,
    normalize_url,
)
from app.core.exceptions import NotFoundError, StorageError, UnknownContentTypeError
from app.core.extraction import (
    ContentExtractor,
    decode_text_file,
    extract_text_from_pdf,
)
from app.core.storage import ObjectStorage, StoredObject, generate_storage_key
from app.models.content_item import ContentItem, ContentStatus
from app.models.content_output import ContentOutput

logger = structlog.get_logger()


UNKNOWN_FILE_TYPE = "Unable to detect content type. Please select manually."
UNKNOWN_URL_TYPE = "Unable to detect content type from URL. Please select manually."


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


async def upload_content_file(
    storage: ObjectStorage,
    data: bytes,
    filename: str,
    content_type: ContentType,
    mime_type: Optional[str] = None
) -> StoredObject:
    """Store an uploaded file under a key grouped by content type."""
    key = generate_storage_key(filename, content_type.value)
    stored = await storage.upload(
        data,
        key,
        content_type=mime_type or "application/octet-stream"
    )
    logger.info("Uploaded content file", key=key, size=len(data))
    return stored


async def save_content_item(
    session: AsyncSession,
    *,
    title: str,
    content_type: ContentType,
    file_path: Optional[str] = None,
    url: Optional[str] = None,
    preview_url: Optional[str] = None,
    target_type: Optional[str] = None,
    user_id: Optional[str] = None,
    content: Optional[str] = None,
    description: Optional[str] = None,
    author: Optional[str] = None,
    published_at: Optional[datetime] = None
) -> ContentItem:
    """
    Insert a content item.

    ``target_type`` only applies to articles and is dropped otherwise. Items
    with extracted text start ``ready``; the rest start ``pending``.
    """
    item = ContentItem(
        title=title,
        content_type=content_type.value,
        file_path=file_path,
        url=url,
        preview_url=preview_url,
        target_type=target_type if content_type is ContentType.ARTICLE else None,
        user_id=user_id,
        content=content,
        description=description,
        author=author,
        published_at=published_at,
        status=(ContentStatus.READY if content else ContentStatus.PENDING).value
    )
    session.add(item)
    await session.commit()
    await session.refresh(item)

    logger.info(
        "Saved content item",
        content_id=str(item.id),
        content_type=item.content_type,
        user_id=user_id
    )
    return item


def _extract_file_text(data: bytes, filename: str, mime_type: Optional[str]) -> Optional[str]:
    if is_pdf(mime_type, filename):
        return extract_text_from_pdf(data)
    if (mime_type or "").startswith("text/") or filename.lower().endswith((".txt", ".md")):
        return decode_text_file(data)
    return None


async def create_content_from_upload(
    session: AsyncSession,
    storage: ObjectStorage,
    *,
    data: bytes,
    filename: str,
    mime_type: Optional[str],
    content_type: Optional[ContentType] = None,
    target_type: Optional[str] = None,
    user_id: Optional[str] = None
) -> ContentItem:
    """
    Detect, store and record an uploaded file.

    An explicit ``content_type`` overrides detection, mirroring the manual
    type selection offered when detection fails.

    Raises:
        UnknownContentTypeError: detection failed and no override was given
        ExtractionError: the file claims to be a PDF but cannot be parsed
    """
    detected = content_type or detect_content_type_from_mime(mime_type, filename)
    if detected is ContentType.UNKNOWN:
        raise UnknownContentTypeError(UNKNOWN_FILE_TYPE)

    content = None
    if detected is ContentType.ARTICLE:
        content = _extract_file_text(data, filename, mime_type)

    stored = await upload_content_file(storage, data, filename, detected, mime_type)

    try:
        return await save_content_item(
            session,
            title=filename,
            content_type=detected,
            file_path=stored.path,
            preview_url=stored.public_url,
            target_type=target_type,
            user_id=user_id,
            content=content
        )
    except SQLAlchemyError:
        # Orphaned object otherwise
        await storage.delete(stored.path)
        raise


async def create_content_from_url(
    session: AsyncSession,
    extractor: ContentExtractor,
    *,
    raw_url: str,
    content_type: Optional[ContentType] = None,
    target_type: Optional[str] = None,
    user_id: Optional[str] = None
) -> ContentItem:
    """
    Record content linked by URL.

    Raises:
        InvalidURLError: the URL cannot be parsed
        UnknownContentTypeError: the URL matches no known kind and no
            override was given
    """
    url = normalize_url(raw_url)
    detected = content_type or detect_content_type_from_url(url, strict=True)
    if detected is ContentType.UNKNOWN:
        raise UnknownContentTypeError(UNKNOWN_URL_TYPE)

    title = default_title_for_url(url, detected)
    preview_url = extract_youtube_info(url).thumbnail_url or None
    content = description = author = None
    published_at = None

    extracted = await extractor.fetch_and_extract(url)
    if extracted.content_type is not ContentType.UNKNOWN:
        if detected is ContentType.ARTICLE and extracted.title:
            title = extracted.title
        content = extracted.content or None
        description = extracted.description or None
        author = extracted.author
        published_at = _parse_timestamp(extracted.publish_date)
        preview_url = preview_url or extracted.image_url
    else:
        logger.warning("Saving linked content without extracted text", url=url)

    return await save_content_item(
        session,
        title=title,
        content_type=detected,
        url=url,
        preview_url=preview_url or url,
        target_type=target_type,
        user_id=user_id,
        content=content,
        description=description,
        author=author,
        published_at=published_at
    )


async def list_content_items(
    session: AsyncSession,
    user_id: Optional[str] = None,
    content_type: Optional[str] = None,
    skip: int = 0,
    limit: int = 50
) -> List[ContentItem]:
    """List content items, newest first."""
    query = select(ContentItem).order_by(desc(ContentItem.created_at))

    if user_id:
        query = query.where(ContentItem.user_id == user_id)
    if content_type:
        query = query.where(ContentItem.content_type == content_type)

    result = await session.execute(query.offset(skip).limit(limit))
    return list(result.scalars().all())


async def get_content_item(session: AsyncSession, content_id: UUID) -> ContentItem:
    item = await session.get(ContentItem, content_id)
    if item is None:
        raise NotFoundError(f"Content item {content_id} not found")
    return item


async def delete_content_item(
    session: AsyncSession,
    storage: ObjectStorage,
    content_id: UUID
) -> None:
    """Delete a content item and its stored file."""
    item = await get_content_item(session, content_id)
    file_path = item.file_path

    await session.delete(item)
    await session.commit()

    if file_path:
        try:
            await storage.delete(file_path)
        except StorageError as e:
            logger.warning("Stored file not removed", key=file_path, error=str(e))

    logger.info("Deleted content item", content_id=str(content_id))


async def list_content_outputs(session: AsyncSession, content_id: UUID) -> List[ContentOutput]:
    await get_content_item(session, content_id)
    result = await session.execute(
        select(ContentOutput)
        .where(ContentOutput.content_id == content_id)
        .order_by(desc(ContentOutput.created_at))
    )
    return list(result.scalars().all())


async def check_connection(session: AsyncSession) -> bool:
    """Return True when the database answers a trivial query."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection error", error=str(e))
        return False
