"""Object storage for uploaded source files and generated media."""

import asyncio
import secrets
import string
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from app.config import settings
from app.core.exceptions import StorageError

logger = structlog.get_logger()


_KEY_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class StoredObject:
    path: str
    public_url: str
    size_bytes: int = 0


def generate_storage_key(filename: str, prefix: str) -> str:
    """
    Build a collision-resistant key: ``{prefix}/{random}_{epoch_ms}.{ext}``.

    The prefix is the content type for uploads, so stored objects are
    grouped by kind.
    """
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    token = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(13))
    return f"{prefix}/{token}_{int(time.time() * 1000)}.{ext}"


class ObjectStorage(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, bucket: str, public_base_url: str):
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{quote(key)}"

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        key: str,
        content_type: str = "application/octet-stream"
    ) -> StoredObject:
        """Store bytes under ``key``."""
        pass

    @abstractmethod
    async def download(self, key: str) -> bytes:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    @abstractmethod
    async def check(self) -> bool:
        """Return True when the backend is reachable."""
        pass


class LocalStorage(ObjectStorage):
    """Filesystem-backed storage rooted at ``local_storage_path``."""

    def __init__(
        self,
        root: str = None,
        bucket: str = None,
        public_base_url: str = None
    ):
        super().__init__(
            bucket or settings.storage_bucket,
            public_base_url or settings.public_base_url
        )
        self.root = Path(root or settings.local_storage_path) / self.bucket
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"Invalid storage key: {key}")
        return path

    async def upload(
        self,
        data: bytes,
        key: str,
        content_type: str = "application/octet-stream"
    ) -> StoredObject:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            raise StorageError(f"Failed to upload file '{key}': {e}") from e

        logger.debug("Stored object", key=key, size=len(data))
        return StoredObject(path=key, public_url=self.public_url(key), size_bytes=len(data))

    async def download(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise StorageError(f"Failed to download file '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        path.unlink(missing_ok=True)

    async def check(self) -> bool:
        return self.root.is_dir()


class S3Storage(ObjectStorage):
    """S3 storage through boto3; works with S3-compatible endpoints."""

    def __init__(self, client=None, bucket: str = None):
        super().__init__(bucket or settings.storage_bucket, settings.public_base_url)
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url
        )
        self._bucket_ready = False

    def _ensure_bucket_exists(self) -> None:
        if self._bucket_ready:
            return
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") not in ("404", "NoSuchBucket"):
                raise StorageError(f"Failed to access bucket '{self.bucket}': {e}") from e
            options = {}
            if settings.aws_region != "us-east-1":
                options["CreateBucketConfiguration"] = {"LocationConstraint": settings.aws_region}
            try:
                self.client.create_bucket(Bucket=self.bucket, **options)
            except ClientError as create_error:
                raise StorageError(
                    f"Failed to create bucket '{self.bucket}': {create_error}"
                ) from create_error
        self._bucket_ready = True

    def _put(self, data: bytes, key: str, content_type: str) -> None:
        self._ensure_bucket_exists()
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type
        )

    def _get(self, key: str) -> bytes:
        response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read()

    async def upload(
        self,
        data: bytes,
        key: str,
        content_type: str = "application/octet-stream"
    ) -> StoredObject:
        try:
            await asyncio.to_thread(self._put, data, key, content_type)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload file '{key}': {e}") from e

        logger.debug("Stored object", key=key, size=len(data), bucket=self.bucket)
        return StoredObject(path=key, public_url=self.public_url(key), size_bytes=len(data))

    async def download(self, key: str) -> bytes:
        try:
            return await asyncio.to_thread(self._get, key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to download file '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete file '{key}': {e}") from e

    async def check(self) -> bool:
        try:
            await asyncio.to_thread(self._ensure_bucket_exists)
            return True
        except (BotoCoreError, StorageError) as e:
            logger.warning("Object storage check failed", error=str(e))
            return False


_storage: Optional[ObjectStorage] = None


def get_storage() -> ObjectStorage:
    """Return the configured storage backend (FastAPI dependency)."""
    global _storage
    if _storage is None:
        if settings.storage_type == "s3":
            _storage = S3Storage()
        else:
            _storage = LocalStorage()
    return _storage
