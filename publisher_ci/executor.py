"""
Executor metadata for result directories.

The report generator reads executor.json from each result directory and shows
the CI build it came from. This module synthesizes that record from the CI
context and stamps it into result directories without ever overwriting one
that is already there.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from publisher_common.models import CIContext, ExecutorMetadata

logger = logging.getLogger(__name__)

EXECUTOR_FILE_NAME = "executor.json"

VENDOR_NAMES = {
    "github": "GitHub",
    "gitlab": "GitLab",
}


def build_executor_metadata(context: CIContext, report_url: str) -> ExecutorMetadata:
    """
    Create executor metadata for the current run.

    Args:
        context: CI context of the run
        report_url: Final URL of the published report

    Returns:
        ExecutorMetadata pointing at the CI build and the report
    """
    build_url = context.build_url
    if not build_url:
        build_url = (
            f"{context.server_url.rstrip('/')}/{context.project_path}"
            f"/-/pipelines/{context.pipeline_id}"
        )

    return ExecutorMetadata(
        name=VENDOR_NAMES.get(context.provider, context.provider),
        type=context.provider,
        report_url=report_url,
        build_url=build_url,
        build_order=str(context.pipeline_id),
        build_name=context.job_name,
    )


def write_executor_metadata(
    result_dirs: Iterable[Path], metadata: ExecutorMetadata
) -> int:
    """
    Write executor.json into every result directory that lacks one.

    Directories are processed in the given order. The file is opened in
    exclusive-create mode, so an existing file (or one created concurrently
    by another process) is left untouched. Parent directories are not
    created: a missing result directory raises FileNotFoundError.

    Args:
        result_dirs: Result directories to stamp
        metadata: Record to write

    Returns:
        Number of directories actually written
    """
    content = json.dumps(metadata.to_dict(), indent=2)
    written = 0

    for result_dir in result_dirs:
        path = Path(result_dir) / EXECUTOR_FILE_NAME
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError:
            logger.debug(f"{path} already exists, skipping")
            continue
        written += 1
        logger.debug(f"Wrote executor metadata to {path}")

    return written
