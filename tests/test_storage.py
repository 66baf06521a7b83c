"""Tests for object storage backends."""

import re

import pytest
from unittest.mock import MagicMock


class TestStorageKeys:
    """Tests for generate_storage_key"""

    def test_key_format(self):
        from app.core.storage import generate_storage_key

        key = generate_storage_key("Quarterly Report.PDF", "article")

        assert re.fullmatch(r"article/[a-z0-9]{13}_\d{13}\.pdf", key)

    def test_missing_extension(self):
        from app.core.storage import generate_storage_key

        assert generate_storage_key("README", "article").endswith(".bin")

    def test_keys_are_unique(self):
        from app.core.storage import generate_storage_key

        keys = {generate_storage_key("clip.mp4", "video") for _ in range(50)}

        assert len(keys) == 50


class TestLocalStorage:
    """Tests for the filesystem backend."""

    @pytest.mark.asyncio
    async def test_upload_download_delete(self, storage):
        stored = await storage.upload(b"hello", "article/abc.txt", content_type="text/plain")

        assert stored.path == "article/abc.txt"
        assert stored.public_url == "http://testserver/media/content/article/abc.txt"
        assert stored.size_bytes == 5
        assert await storage.download("article/abc.txt") == b"hello"

        await storage.delete("article/abc.txt")

        assert not (storage.root / "article" / "abc.txt").exists()

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, storage):
        await storage.delete("article/never-stored.txt")

    @pytest.mark.asyncio
    async def test_download_missing(self, storage):
        from app.core.exceptions import StorageError

        with pytest.raises(StorageError):
            await storage.download("article/missing.txt")

    @pytest.mark.asyncio
    async def test_path_traversal_rejected(self, storage):
        from app.core.exceptions import StorageError

        with pytest.raises(StorageError, match="Invalid storage key"):
            await storage.upload(b"x", "../../etc/passwd")

    @pytest.mark.asyncio
    async def test_check(self, storage):
        assert await storage.check() is True


class TestS3Storage:
    """Tests for the S3 backend with a mocked boto3 client."""

    def _storage(self, client):
        from app.core.storage import S3Storage

        storage = S3Storage(client=client, bucket="content")
        storage.public_base_url = "https://cdn.example.com"
        return storage

    @staticmethod
    def _client_error(code):
        from botocore.exceptions import ClientError

        return ClientError({"Error": {"Code": code, "Message": code}}, "HeadBucket")

    @pytest.mark.asyncio
    async def test_upload_creates_bucket_once(self):
        client = MagicMock()
        client.head_bucket.side_effect = self._client_error("404")
        storage = self._storage(client)

        stored = await storage.upload(b"abc", "podcast/a.mp3", content_type="audio/mpeg")
        await storage.upload(b"def", "podcast/b.mp3", content_type="audio/mpeg")

        client.create_bucket.assert_called_once()
        assert client.put_object.call_count == 2
        kwargs = client.put_object.call_args_list[0].kwargs
        assert kwargs["Key"] == "podcast/a.mp3"
        assert kwargs["Body"] == b"abc"
        assert kwargs["ContentType"] == "audio/mpeg"
        assert stored.public_url == "https://cdn.example.com/content/podcast/a.mp3"

    @pytest.mark.asyncio
    async def test_download(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": MagicMock(read=MagicMock(return_value=b"data"))}

        assert await self._storage(client).download("article/a.txt") == b"data"

    @pytest.mark.asyncio
    async def test_delete_failure(self):
        from app.core.exceptions import StorageError

        client = MagicMock()
        client.delete_object.side_effect = self._client_error("AccessDenied")

        with pytest.raises(StorageError, match="Failed to delete file"):
            await self._storage(client).delete("article/a.txt")

    @pytest.mark.asyncio
    async def test_check_failure(self):
        client = MagicMock()
        client.head_bucket.side_effect = self._client_error("403")

        assert await self._storage(client).check() is False
        client.create_bucket.assert_not_called()
