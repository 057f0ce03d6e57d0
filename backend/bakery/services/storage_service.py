"""
Product image storage (S3-compatible object storage) and an in-memory test double
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import boto3
from botocore.config import Config

from bakery.core.config import settings
from bakery.core.errors import StorageNotConfiguredError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


class ImageStorage(Protocol):
    """Operations the product API needs from object storage"""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store the bytes and return their public URL"""
        ...

    def delete(self, path: str) -> None:
        ...


@dataclass
class InMemoryImageStorage:
    """Test double for storage interactions."""

    base_url: str = "https://storage.test/products"
    stored_objects: Dict[str, bytes] = field(default_factory=dict)

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        self.stored_objects[path] = data
        return f"{self.base_url}/{path}"

    def delete(self, path: str) -> None:
        self.stored_objects.pop(path, None)


@dataclass
class S3ImageStorage:
    """
    Public-read image bucket on any S3-compatible provider.
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    public_base_url: str = ""

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )

    def _public_url(self, path: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{path}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{path}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{path}"

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        self._client.put_object(
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
            CacheControl="public, max-age=31536000",
        )
        return self._public_url(path)

    def delete(self, path: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=path)


_storage: Optional[ImageStorage] = None


def get_image_storage() -> ImageStorage:
    """
    Storage client built from settings, created on first use.

    Raises:
        StorageNotConfiguredError: STORAGE_BUCKET is not set
    """
    global _storage
    if _storage is None:
        if not settings.STORAGE_BUCKET:
            raise StorageNotConfiguredError("Image storage is not configured")
        _storage = S3ImageStorage(
            bucket=settings.STORAGE_BUCKET,
            region=settings.STORAGE_REGION,
            endpoint=settings.STORAGE_ENDPOINT,
            access_key_id=settings.STORAGE_ACCESS_KEY_ID,
            secret_access_key=settings.STORAGE_SECRET_ACCESS_KEY,
            public_base_url=settings.STORAGE_PUBLIC_BASE_URL,
        )
    return _storage


def validate_image(content_type: Optional[str], size: int) -> None:
    """
    Raises:
        ValidationError: not an image/* upload, or larger than MAX_IMAGE_SIZE_BYTES
    """
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("Only image files are allowed")
    if size > settings.MAX_IMAGE_SIZE_BYTES:
        limit_mb = settings.MAX_IMAGE_SIZE_BYTES // (1024 * 1024)
        raise ValidationError(f"Image too large (max {limit_mb}MB)")


def build_image_path(filename: Optional[str], content_type: str) -> str:
    """Unique object key under products/ keeping a sensible extension"""
    extension = IMAGE_EXTENSIONS.get(content_type)
    if extension is None and filename and "." in filename:
        extension = filename.rsplit(".", 1)[1].lower()
    return f"products/{uuid.uuid4().hex}.{extension or 'bin'}"
