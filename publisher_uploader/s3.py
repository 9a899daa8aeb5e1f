"""
Amazon S3 (and S3-compatible) object store backed by boto3.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from publisher_common.errors import ConfigurationError

from .object_store import ObjectStore

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = ("NoSuchKey", "404", "NotFound")


class S3ObjectStore(ObjectStore):
    """
    Thin wrapper over a boto3 S3 client for one bucket.

    When a custom endpoint is configured (minio, localstack, ...) objects are
    addressed path-style: <endpoint>/<bucket>/<key>.
    """

    def __init__(
        self,
        bucket: str,
        endpoint: str | None = None,
        region: str | None = None,
        client: Any = None,
    ):
        self.bucket = bucket
        self.endpoint = endpoint.rstrip("/") if endpoint else None
        if client is None:
            try:
                client = boto3.client("s3", endpoint_url=self.endpoint, region_name=region)
            except BotoCoreError as e:
                raise ConfigurationError(f"Failed to create S3 client: {e}") from e
        self.client = client

    def _put(self, path: Path, key: str, content_type: str | None, cache_control: str | None) -> None:
        put_kwargs: dict[str, Any] = {"Bucket": self.bucket, "Key": key}
        if content_type:
            put_kwargs["ContentType"] = content_type
        if cache_control:
            put_kwargs["CacheControl"] = cache_control
        with open(path, "rb") as body:
            self.client.put_object(Body=body, **put_kwargs)

    def _get(self, key: str) -> bytes | None:
        try:
            resp = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_OBJECT_CODES:
                return None
            raise
        return resp["Body"].read()

    async def upload_file(
        self,
        path: Path,
        key: str,
        content_type: str | None = None,
        cache_control: str | None = None,
    ) -> None:
        logger.debug(f"Uploading {path} to s3://{self.bucket}/{key}")
        await asyncio.to_thread(self._put, path, key, content_type, cache_control)

    async def download(self, key: str) -> bytes | None:
        logger.debug(f"Downloading s3://{self.bucket}/{key}")
        return await asyncio.to_thread(self._get, key)

    def url_for(self, key: str) -> str:
        if self.endpoint:
            return f"{self.endpoint}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"
