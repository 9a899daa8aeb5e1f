"""
Uploader for object storage backends (S3, GCS).

Reports are stored per build under <prefix>/<buildOrder>/ and optionally
mirrored to <prefix>/latest/. The history file lives at a fixed key under the
prefix so each run can pick up what the previous run left behind.
"""

import asyncio
import logging
import mimetypes
from pathlib import Path

from publisher_common.errors import ArtifactDownloadError, UploadError
from publisher_common.models import CIContext, ReportBuild, UploadTarget

from .base import Uploader
from .object_store import ObjectStore

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8
LATEST_CACHE_CONTROL = "no-cache"


class ObjectStorageUploader(Uploader):
    """Uploads a report tree to a bucket through an ObjectStore."""

    def __init__(
        self,
        context: CIContext,
        build: ReportBuild,
        target: UploadTarget,
        store: ObjectStore,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        """
        Initialize the uploader.

        Args:
            context: CI context of the current run
            build: Local report tree, history file and plugin list
            target: Bucket, prefix and copy-latest flag
            store: Object store for target.bucket
            concurrency: Maximum number of concurrent object uploads
        """
        super().__init__(context, build)
        self.target = target
        self.store = store
        self.concurrency = concurrency

    @property
    def build_order(self) -> str:
        return str(self.context.pipeline_id)

    async def download_history(self) -> Path | None:
        key = self.target.history_key
        try:
            content = await self.store.download(key)
        except Exception as e:
            raise ArtifactDownloadError(
                f"Failed to download history object '{key}'. Err: '{e}'"
            ) from e

        if content is None:
            logger.debug(f"History object '{key}' not found, skipping history download")
            return None

        history_path = self.build.history_path
        history_path.parent.mkdir(parents=True, exist_ok=True)
        history_path.write_bytes(content)
        logger.debug(f"Wrote history from '{key}' to {history_path}")
        return history_path

    def _report_files(self) -> list[tuple[Path, str]]:
        root = self.build.report_path
        return [
            (path, path.relative_to(root).as_posix())
            for path in sorted(root.rglob("*"))
            if path.is_file()
        ]

    async def _upload_one(
        self,
        semaphore: asyncio.Semaphore,
        path: Path,
        key: str,
        cache_control: str | None = None,
    ) -> None:
        content_type, _ = mimetypes.guess_type(path.name)
        async with semaphore:
            try:
                await self.store.upload_file(
                    path, key, content_type=content_type, cache_control=cache_control
                )
            except Exception as e:
                raise UploadError(f"Failed to upload '{path}' to '{key}'. Err: '{e}'") from e

    async def upload(self) -> str:
        files = self._report_files()
        if not files:
            raise UploadError(f"No report files found in {self.build.report_path}")

        semaphore = asyncio.Semaphore(self.concurrency)
        uploads = [(path, self.target.run_key(self.build_order, rel), None) for path, rel in files]
        if self.target.copy_latest:
            uploads += [
                (path, self.target.latest_key(rel), LATEST_CACHE_CONTROL) for path, rel in files
            ]

        logger.info(
            f"Uploading {len(files)} report files to {self.store.bucket}/"
            f"{self.target.run_key(self.build_order)}"
        )
        # The first failure cancels the uploads still pending.
        try:
            async with asyncio.TaskGroup() as tg:
                for path, key, cache_control in uploads:
                    tg.create_task(self._upload_one(semaphore, path, key, cache_control))
        except ExceptionGroup as eg:
            raise eg.exceptions[0]

        history_path = self.build.history_path
        if history_path.is_file():
            await self._upload_one(semaphore, history_path, self.target.history_key)

        return self.report_url()

    def report_url(self, plugin: str | None = None) -> str:
        parts = [plugin, "index.html"] if plugin else ["index.html"]
        return self.store.url_for(self.target.run_key(self.build_order, *parts))

    def latest_report_url(self) -> str:
        return self.store.url_for(self.target.latest_key("index.html"))
