"""
Minimal GitLab REST API v4 client.

Implements the pipeline, job and artifact collaborator interfaces on top of
requests. Blocking HTTP calls are dispatched to a worker thread so the
async callers are never blocked.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import requests

from publisher_common.errors import GitLabAPIError
from publisher_common.models import Job, Pipeline

from .interfaces import ArtifactDownloader, JobLister, PipelineLister

logger = logging.getLogger(__name__)


class GitLabClient(PipelineLister, JobLister, ArtifactDownloader):
    """
    GitLab API client covering the calls needed for history continuity.

    Authentication uses a personal/project access token (PRIVATE-TOKEN) when
    given, otherwise the CI job token (JOB-TOKEN).
    """

    def __init__(
        self,
        server_url: str,
        private_token: str | None = None,
        job_token: str | None = None,
        timeout: float = 30,
    ):
        """
        Initialize the client.

        Args:
            server_url: GitLab instance URL, e.g. https://gitlab.com
            private_token: Access token with read_api scope
            job_token: CI_JOB_TOKEN of the running job
            timeout: Per-request timeout in seconds
        """
        self.api_url = f"{server_url.rstrip('/')}/api/v4"
        self.timeout = timeout
        self.headers: dict[str, str] = {}
        if private_token:
            self.headers["PRIVATE-TOKEN"] = private_token
        elif job_token:
            self.headers["JOB-TOKEN"] = job_token

    def _project_url(self, project_id: str) -> str:
        return f"{self.api_url}/projects/{quote(str(project_id), safe='')}"

    def _get(self, url: str, params: Any = None) -> requests.Response:
        try:
            response = requests.get(
                url, params=params, headers=self.headers, timeout=self.timeout
            )
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as e:
            raise GitLabAPIError(f"GitLab API request failed: {e}") from e

    def _get_pages(
        self, url: str, params: dict[str, Any], max_pages: int | None = None
    ) -> list[dict[str, Any]]:
        """Fetch consecutive pages until exhausted or max_pages is reached."""
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            response = self._get(url, params={**params, "page": page})
            items.extend(response.json())
            next_page = response.headers.get("X-Next-Page")
            if not next_page or (max_pages is not None and page >= max_pages):
                return items
            page = int(next_page)

    async def list_pipelines(
        self,
        project_id: str,
        ref: str | None = None,
        source: str | None = None,
        per_page: int = 100,
        max_pages: int = 1,
    ) -> list[Pipeline]:
        params: dict[str, Any] = {"per_page": per_page}
        if ref:
            params["ref"] = ref
        if source:
            params["source"] = source

        url = f"{self._project_url(project_id)}/pipelines"
        logger.debug(f"Listing pipelines: {url} {params}")
        data = await asyncio.to_thread(self._get_pages, url, params, max_pages)
        return [Pipeline.from_dict(item) for item in data]

    async def list_jobs(
        self,
        project_id: str,
        pipeline_id: int,
        scope: str,
        include_retried: bool = False,
        per_page: int = 100,
    ) -> list[Job]:
        params: dict[str, Any] = {
            "scope[]": scope,
            "include_retried": str(include_retried).lower(),
            "per_page": per_page,
        }
        url = f"{self._project_url(project_id)}/pipelines/{pipeline_id}/jobs"
        logger.debug(f"Listing jobs: {url} {params}")
        data = await asyncio.to_thread(self._get_pages, url, params, 1)
        return [Job.from_dict(item) for item in data]

    async def download_artifact(
        self, project_id: str, job_id: int, artifact_path: str
    ) -> bytes:
        url = f"{self._project_url(project_id)}/jobs/{job_id}/artifacts/{artifact_path}"
        logger.debug(f"Downloading artifact: {url}")
        response = await asyncio.to_thread(self._get, url)
        return response.content
