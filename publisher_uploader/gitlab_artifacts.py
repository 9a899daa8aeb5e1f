"""
Uploader for GitLab CI job artifacts.

GitLab itself stores the report as a job artifact once the job finishes, so
there is nothing to transfer. This uploader only carries history over from
the previous pipeline and computes the artifact browsing URLs.
"""

import logging
from pathlib import Path

from publisher_ci.history import GitLabHistoryResolver
from publisher_ci.urls import GitLabReportUrlResolver
from publisher_common.models import CIContext, ReportBuild

from .base import Uploader

logger = logging.getLogger(__name__)


class GitLabArtifactsUploader(Uploader):
    """Report "uploader" backed by GitLab job artifacts."""

    def __init__(
        self,
        context: CIContext,
        build: ReportBuild,
        history_resolver: GitLabHistoryResolver,
    ):
        super().__init__(context, build)
        self.history_resolver = history_resolver
        self.url_resolver = GitLabReportUrlResolver(context, build.report_path)

    async def download_history(self) -> Path | None:
        return await self.history_resolver.download(self.build.history_path)

    async def upload(self) -> str:
        logger.debug("Report is published by GitLab as a job artifact, nothing to upload")
        return self.report_url()

    def report_url(self, plugin: str | None = None) -> str:
        return self.url_resolver.report_url(plugin)
