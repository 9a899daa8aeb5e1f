"""
Abstract uploader interface.

Every backend (S3, GCS, GitLab artifacts) exposes the same four operations,
so the publish flow never needs to know which one it is talking to.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from publisher_common.models import CIContext, ReportBuild

logger = logging.getLogger(__name__)


class Uploader(ABC):
    """
    Base class for report uploaders.

    Subclasses provide history retrieval, the upload itself and URL
    construction. URL enumeration and logging are shared.
    """

    def __init__(self, context: CIContext, build: ReportBuild):
        """
        Initialize the uploader.

        Args:
            context: CI context of the current run
            build: Local report tree, history file and plugin list
        """
        self.context = context
        self.build = build

    @abstractmethod
    async def download_history(self) -> Path | None:
        """
        Fetch the previous run's history into build.history_path.

        Returns:
            The history path if history was written, None if continuity was skipped
        """
        pass

    @abstractmethod
    async def upload(self) -> str:
        """
        Publish the report tree.

        Returns:
            Primary report URL
        """
        pass

    @abstractmethod
    def report_url(self, plugin: str | None = None) -> str:
        """
        Get the report URL, or the URL of a plugin's sub-report.

        Args:
            plugin: Plugin name, None for the main report
        """
        pass

    def report_urls(self) -> list[str]:
        """Primary report URL followed by one URL per plugin, in plugin order."""
        return [self.report_url()] + [
            self.report_url(plugin) for plugin in self.build.plugins
        ]

    def output_report_urls(self) -> None:
        """Log all report URLs, one line each."""
        for url in self.report_urls():
            logger.info(f"- {url}")
