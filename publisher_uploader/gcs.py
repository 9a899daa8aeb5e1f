"""
Google Cloud Storage object store backed by google-cloud-storage.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from google.api_core.exceptions import NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from publisher_common.errors import ConfigurationError

from .object_store import ObjectStore

logger = logging.getLogger(__name__)

GCS_PUBLIC_URL = "https://storage.googleapis.com"


class GCSObjectStore(ObjectStore):
    """Thin wrapper over a google-cloud-storage bucket handle."""

    def __init__(self, bucket: str, client: Any = None):
        self.bucket = bucket
        if client is None:
            try:
                client = storage.Client()
            except GoogleAuthError as e:
                raise ConfigurationError(f"Failed to create GCS client: {e}") from e
        self.client = client
        self._bucket = self.client.bucket(bucket)

    def _put(self, path: Path, key: str, content_type: str | None, cache_control: str | None) -> None:
        blob = self._bucket.blob(key)
        if cache_control:
            blob.cache_control = cache_control
        blob.upload_from_filename(str(path), content_type=content_type)

    def _get(self, key: str) -> bytes | None:
        try:
            return self._bucket.blob(key).download_as_bytes()
        except NotFound:
            return None

    async def upload_file(
        self,
        path: Path,
        key: str,
        content_type: str | None = None,
        cache_control: str | None = None,
    ) -> None:
        logger.debug(f"Uploading {path} to gs://{self.bucket}/{key}")
        await asyncio.to_thread(self._put, path, key, content_type, cache_control)

    async def download(self, key: str) -> bytes | None:
        logger.debug(f"Downloading gs://{self.bucket}/{key}")
        return await asyncio.to_thread(self._get, key)

    def url_for(self, key: str) -> str:
        return f"{GCS_PUBLIC_URL}/{self.bucket}/{key}"
