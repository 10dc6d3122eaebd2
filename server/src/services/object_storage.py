import logging
import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

import boto3
from botocore.exceptions import ClientError
from starlette.concurrency import run_in_threadpool

from core.errors import NotFound

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}
OBJECTS_PREFIX = "/objects/"


class ObjectNotFoundError(NotFound):
    def __init__(self, message: str = "Object not found") -> None:
        super().__init__(message)


@dataclass
class StoredObject:
    key: str
    content_type: str
    content_length: int | None
    chunks: Iterator[bytes]


class ObjectStorageService:
    """Media attachments kept in an S3 bucket.

    Access control is the bucket policy plus presigned URLs; the app only
    hands out upload URLs and proxies downloads.
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        client=None,
        upload_ttl_seconds: int = 900,
        cache_ttl_seconds: int = 3600,
    ):
        self.bucket = bucket
        self.client = client or boto3.client("s3", region_name=region)
        self.upload_ttl_seconds = upload_ttl_seconds
        self.cache_ttl_seconds = cache_ttl_seconds

    async def get_upload_url(self) -> str:
        key = f"uploads/{uuid.uuid4()}"
        return await run_in_threadpool(
            self.client.generate_presigned_url,
            "put_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=self.upload_ttl_seconds,
        )

    def normalize_object_path(self, raw_path: str) -> str:
        """Map a presigned URL, bare key or /objects/ path to ``/objects/<key>``."""
        if raw_path.startswith(OBJECTS_PREFIX):
            return raw_path
        if raw_path.startswith(("https://", "http://")):
            key = urlparse(raw_path).path.lstrip("/")
            # Path-style URLs carry the bucket as their first segment
            if key.startswith(f"{self.bucket}/"):
                key = key[len(self.bucket) + 1:]
        else:
            key = raw_path.lstrip("/")
        return f"{OBJECTS_PREFIX}{unquote(key)}"

    async def open_object(self, key: str) -> StoredObject:
        if not key:
            raise ObjectNotFoundError()
        try:
            obj = await run_in_threadpool(
                self.client.get_object, Bucket=self.bucket, Key=key
            )
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in MISSING_OBJECT_CODES:
                raise ObjectNotFoundError() from e
            logger.error("S3 get_object failed for %s: %s", key, e)
            raise

        return StoredObject(
            key=key,
            content_type=obj.get("ContentType") or "application/octet-stream",
            content_length=obj.get("ContentLength"),
            chunks=obj["Body"].iter_chunks(),
        )
