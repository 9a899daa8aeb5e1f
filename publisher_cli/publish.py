"""
Publish flow: history, executor metadata, report generation, upload.

The flow is backend agnostic; the CLI picks the uploader once and hands it in.
"""

import glob
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path

from publisher_ci.executor import write_executor_metadata
from publisher_common.errors import MissingResultsError, NotEnoughPipelinesError
from publisher_common.models import ExecutorMetadata, PublishResult
from publisher_uploader.base import Uploader

from .generator import AllureReportGenerator

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Posts report links to a pull/merge request."""

    @abstractmethod
    async def notify(self, result: PublishResult) -> None:
        """
        Publish the report URLs of a finished run.

        Args:
            result: Report URLs (primary first) and executor metadata
        """
        pass


def find_result_dirs(pattern: str) -> list[Path]:
    """
    Expand a results glob into result directories.

    Args:
        pattern: Glob pattern, "**" matches recursively

    Returns:
        Sorted, de-duplicated list of matching directories

    Raises:
        MissingResultsError: If no directory matches
    """
    dirs = sorted({Path(p) for p in glob.glob(pattern, recursive=True) if Path(p).is_dir()})
    if not dirs:
        raise MissingResultsError(f"No result directories found matching '{pattern}'")
    return dirs


async def publish(
    uploader: Uploader,
    generator: AllureReportGenerator,
    result_dirs: Sequence[Path],
    metadata_factory: Callable[[str], ExecutorMetadata],
    notifier: Notifier | None = None,
    ignore_missing_history: bool = False,
) -> PublishResult:
    """
    Run the full publish flow.

    Args:
        uploader: Backend selected for this run
        generator: Report generator
        result_dirs: Result directories to stamp and build the report from
        metadata_factory: Builds executor metadata from the report URL
        notifier: Optional pull/merge request notifier
        ignore_missing_history: Continue without history if there is no previous pipeline

    Returns:
        Report URLs and executor metadata of the run

    Raises:
        PublisherError: Any fatal failure; no upload happens after a history failure
    """
    result = PublishResult()

    try:
        result.history_path = await uploader.download_history()
    except NotEnoughPipelinesError as e:
        if not ignore_missing_history:
            raise
        logger.warning(f"{e}, continuing without history")

    if result.history_path is None:
        logger.debug("Report will be generated without history from a previous run")

    result.metadata = metadata_factory(uploader.report_url())
    written = write_executor_metadata(result_dirs, result.metadata)
    logger.debug(f"Executor metadata written to {written} of {len(result_dirs)} result directories")

    await generator.generate(result_dirs)

    await uploader.upload()
    uploader.output_report_urls()
    result.report_urls = uploader.report_urls()

    if notifier is not None:
        await notifier.notify(result)

    return result
