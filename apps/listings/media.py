"""Media adapter: stores listing photos and returns durable references."""

from __future__ import annotations

import hashlib
import logging
import uuid
from io import BytesIO
from typing import Protocol
from urllib.parse import quote

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings  # type: ignore
from django.core.files.storage import default_storage  # type: ignore
from django.utils.module_loading import import_string  # type: ignore
from django.utils.text import get_valid_filename  # type: ignore
from PIL import Image, UnidentifiedImageError

from shared.domain.errors import UploadFailed
from shared.domain.value_objects import StoredImage

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ("JPEG", "PNG", "WEBP")


class MediaStore(Protocol):
    def store(self, file_obj) -> StoredImage:
        ...

    def discard(self, key: str) -> None:
        ...


def _metadata_name(file_obj) -> str:
    # S3 user metadata must be ASCII.
    return quote(get_valid_filename(getattr(file_obj, "name", "upload")))


def default_image() -> StoredImage:
    return StoredImage(url=settings.DEFAULT_LISTING_IMAGE_URL, key="")


class S3MediaStore:
    """S3/MinIO storage for listing photos with validation and downscaling."""

    def __init__(self, client=None):
        self.s3_client = client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
            config=BotoConfig(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                connect_timeout=settings.MEDIA_TIMEOUT,
                read_timeout=settings.MEDIA_TIMEOUT,
                retries={"max_attempts": 2},
            ),
            use_ssl=settings.S3_USE_SSL,
        )
        self.bucket_name = settings.S3_BUCKET_NAME
        self.public_base = (settings.S3_PUBLIC_BASE or "").rstrip("/")
        self.max_size = settings.PHOTO_MAX_SIZE
        self.max_dimension = settings.PHOTO_MAX_DIMENSION

    # ---------- image utils ----------

    def _validate_image(self, file_obj):
        size = getattr(file_obj, "size", None)
        if size is not None and size > self.max_size:
            raise UploadFailed(f"Image is too large. Maximum is {self.max_size / 1024 / 1024:.1f} MB.")

        try:
            file_obj.seek(0)
            img = Image.open(file_obj)
            img.load()
        except Image.DecompressionBombError as e:
            raise UploadFailed("Image dimensions are too large.") from e
        except (UnidentifiedImageError, OSError) as e:
            raise UploadFailed("The uploaded file is not a valid image.") from e
        if img.format not in ALLOWED_FORMATS:
            raise UploadFailed(f"Unsupported image format: {img.format}.")
        return img

    def _optimize_image(self, img, quality=85):
        """Returns (bytes_io, ext, content_type)."""
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGB")

        if img.width > self.max_dimension or img.height > self.max_dimension:
            img.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)

        out = BytesIO()
        if img.mode == "RGBA":
            img.save(out, format="WEBP", quality=quality, method=6)
            ext, content_type = "webp", "image/webp"
        else:
            img.save(out, format="JPEG", quality=quality, optimize=True)
            ext, content_type = "jpg", "image/jpeg"
        out.seek(0)
        return out, ext, content_type

    def _generate_key(self, optimized_bytes: bytes, ext: str) -> str:
        h = hashlib.md5(optimized_bytes).hexdigest()[:8]
        uid = uuid.uuid4().hex[:8]
        return f"listings/{h}_{uid}.{ext}"

    def url(self, key: str) -> str:
        if self.public_base:
            return f"{self.public_base}/{key}"
        endpoint = (settings.S3_ENDPOINT_URL or "").rstrip("/")
        if endpoint:
            return f"{endpoint}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{settings.S3_REGION}.amazonaws.com/{key}"

    # ---------- MediaStore API ----------

    def store(self, file_obj) -> StoredImage:
        img = self._validate_image(file_obj)
        try:
            optimized_io, ext, content_type = self._optimize_image(img)
        except (OSError, ValueError) as e:
            logger.error(f"Re-encoding photo failed: {e}")
            raise UploadFailed("The image could not be processed.") from e
        key = self._generate_key(optimized_io.getbuffer(), ext)

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=optimized_io.getvalue(),
                ContentType=content_type,
                CacheControl="max-age=31536000",
                Metadata={"original_name": _metadata_name(file_obj)},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload failed for {key}: {e}")
            raise UploadFailed() from e

        logger.info(f"Uploaded listing photo {key}")
        return StoredImage(url=self.url(key), key=key)

    def discard(self, key: str) -> None:
        if not key:
            return
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            logger.info(f"Deleted listing photo {key}")
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting photo {key}: {e}")


class LocalMediaStore:
    """Stores photos through Django's default storage (filesystem in dev/tests)."""

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def store(self, file_obj) -> StoredImage:
        name = get_valid_filename(getattr(file_obj, "name", "upload")) or "upload"
        try:
            file_obj.seek(0)
            key = self.storage.save(f"listings/{uuid.uuid4().hex[:8]}_{name}", file_obj)
        except OSError as e:
            logger.error(f"Saving photo {name} failed: {e}")
            raise UploadFailed() from e
        logger.info(f"Stored listing photo {key}")
        return StoredImage(url=self.storage.url(key), key=key)

    def discard(self, key: str) -> None:
        if not key:
            return
        try:
            self.storage.delete(key)
        except OSError as e:
            logger.error(f"Error deleting photo {key}: {e}")


def get_media_store() -> MediaStore:
    return import_string(settings.MEDIA_STORE_BACKEND)()
