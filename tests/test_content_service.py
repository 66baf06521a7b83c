"""Tests for content item persistence."""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4


class TestCreateFromUpload:
    """Tests for create_content_from_upload"""

    @pytest.mark.asyncio
    async def test_text_upload(self, db_session, storage):
        """Text uploads are stored, extracted and marked ready."""
        from app.services.content_service import create_content_from_upload

        item = await create_content_from_upload(
            db_session,
            storage,
            data=b"Five lessons from a year of blogging.",
            filename="lessons.txt",
            mime_type="text/plain",
            target_type="audio",
            user_id="user-1"
        )

        assert item.content_type == "article"
        assert item.status == "ready"
        assert item.title == "lessons.txt"
        assert item.target_type == "audio"
        assert item.content == "Five lessons from a year of blogging."
        assert item.file_path.startswith("article/")
        assert item.preview_url == storage.public_url(item.file_path)
        assert await storage.download(item.file_path) == b"Five lessons from a year of blogging."

    @pytest.mark.asyncio
    async def test_video_upload_drops_target_type(self, db_session, storage):
        from app.services.content_service import create_content_from_upload

        item = await create_content_from_upload(
            db_session,
            storage,
            data=b"\x00\x00\x00\x18ftypmp42",
            filename="clip.mp4",
            mime_type="video/mp4",
            target_type="audio"
        )

        assert item.content_type == "video"
        assert item.status == "pending"
        assert item.target_type is None
        assert item.content is None

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, db_session, storage):
        from app.core.exceptions import UnknownContentTypeError
        from app.services.content_service import create_content_from_upload, UNKNOWN_FILE_TYPE

        with pytest.raises(UnknownContentTypeError, match=UNKNOWN_FILE_TYPE):
            await create_content_from_upload(
                db_session,
                storage,
                data=b"\x89PNG",
                filename="image.png",
                mime_type="image/png"
            )

        assert not any(storage.root.rglob("*.png"))

    @pytest.mark.asyncio
    async def test_manual_type_override(self, db_session, storage):
        from app.core.content_detection import ContentType
        from app.services.content_service import create_content_from_upload

        item = await create_content_from_upload(
            db_session,
            storage,
            data=b"\x89PNG",
            filename="slide.png",
            mime_type="image/png",
            content_type=ContentType.VIDEO
        )

        assert item.content_type == "video"


class TestCreateFromUrl:
    """Tests for create_content_from_url"""

    def _extractor(self, extracted):
        extractor = AsyncMock()
        extractor.fetch_and_extract.return_value = extracted
        return extractor

    @pytest.mark.asyncio
    async def test_article_url(self, db_session):
        from app.core.content_detection import ContentType
        from app.core.extraction import ExtractedContent
        from app.services.content_service import create_content_from_url

        extractor = self._extractor(ExtractedContent(
            title="Why Remote Works",
            content="Long form text.",
            description="An essay",
            image_url="https://blog.example.com/cover.png",
            author="Alex",
            publish_date="2024-02-01T10:00:00Z",
            content_type=ContentType.ARTICLE
        ))

        item = await create_content_from_url(
            db_session, extractor, raw_url="blog.example.com/remote", target_type="video"
        )

        extractor.fetch_and_extract.assert_awaited_once_with("https://blog.example.com/remote")
        assert item.url == "https://blog.example.com/remote"
        assert item.title == "Why Remote Works"
        assert item.content == "Long form text."
        assert item.status == "ready"
        assert item.preview_url == "https://blog.example.com/cover.png"
        assert item.target_type == "video"
        assert item.published_at.year == 2024

    @pytest.mark.asyncio
    async def test_youtube_url(self, db_session):
        from app.core.extraction.html_extractor import _media_placeholder
        from app.core.content_detection import ContentType
        from app.services.content_service import create_content_from_url

        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        extractor = self._extractor(_media_placeholder(url, ContentType.VIDEO))

        item = await create_content_from_url(db_session, extractor, raw_url=url)

        assert item.content_type == "video"
        assert item.title == "YouTube Video"
        assert item.preview_url == "https://img.youtube.com/vi/dQw4w9WgXcQ/hqdefault.jpg"
        assert item.status == "pending"

    @pytest.mark.asyncio
    async def test_failed_fetch_still_saves(self, db_session):
        from app.core.extraction import ExtractedContent
        from app.services.content_service import create_content_from_url

        extractor = self._extractor(ExtractedContent(title="Content from news.example.com"))

        item = await create_content_from_url(db_session, extractor, raw_url="https://news.example.com/x")

        assert item.title == "Article from news.example.com"
        assert item.content is None
        assert item.preview_url == "https://news.example.com/x"

    @pytest.mark.asyncio
    async def test_undetectable_url(self, db_session):
        from app.core.exceptions import UnknownContentTypeError
        from app.services.content_service import create_content_from_url

        extractor = self._extractor(None)

        with pytest.raises(UnknownContentTypeError):
            await create_content_from_url(db_session, extractor, raw_url="https://example.com/about")

        extractor.fetch_and_extract.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_url(self, db_session):
        from app.core.exceptions import InvalidURLError
        from app.services.content_service import create_content_from_url

        with pytest.raises(InvalidURLError):
            await create_content_from_url(db_session, self._extractor(None), raw_url="")


class TestArchive:
    """Tests for listing, fetching and deleting content."""

    @pytest.mark.asyncio
    async def test_list_filters(self, db_session, content_item):
        from app.services.content_service import list_content_items, save_content_item
        from app.core.content_detection import ContentType

        await save_content_item(
            db_session, title="Episode 12", content_type=ContentType.PODCAST, user_id="user-2"
        )

        assert len(await list_content_items(db_session)) == 2
        assert [i.title for i in await list_content_items(db_session, content_type="podcast")] == ["Episode 12"]
        assert [i.title for i in await list_content_items(db_session, user_id="user-2")] == ["Episode 12"]

    @pytest.mark.asyncio
    async def test_get_missing(self, db_session):
        from app.core.exceptions import NotFoundError
        from app.services.content_service import get_content_item

        with pytest.raises(NotFoundError):
            await get_content_item(db_session, uuid4())

    @pytest.mark.asyncio
    async def test_delete_removes_file_and_jobs(self, db_session, storage):
        """Deleting an item removes its stored file and cascades to its jobs."""
        from sqlalchemy import select
        from app.models.processing_job import ProcessingJob
        from app.schemas.job import ProcessingOptions
        from app.services.content_service import create_content_from_upload, delete_content_item
        from app.services.processing_service import create_processing_job

        item = await create_content_from_upload(
            db_session, storage, data=b"text", filename="a.txt", mime_type="text/plain"
        )
        await create_processing_job(
            db_session, item.id, ProcessingOptions(target_format="newsletter")
        )
        file_path = item.file_path

        await delete_content_item(db_session, storage, item.id)

        assert not (storage.root / file_path).exists()
        jobs = await db_session.execute(select(ProcessingJob.id))
        assert jobs.scalars().all() == []

    @pytest.mark.asyncio
    async def test_check_connection(self, db_session):
        from app.services.content_service import check_connection

        assert await check_connection(db_session) is True
