"""
Abstract collaborator interfaces for CI provider access.

These narrow contracts let the history resolver work against any client
implementation: the requests-based GitLab client in production, or a test
double supplied at construction time.
"""

from abc import ABC, abstractmethod

from publisher_common.models import Job, Pipeline


class PipelineLister(ABC):
    """Lists pipelines of a project, most recent first."""

    @abstractmethod
    async def list_pipelines(
        self,
        project_id: str,
        ref: str | None = None,
        source: str | None = None,
        per_page: int = 100,
        max_pages: int = 1,
    ) -> list[Pipeline]:
        """
        List pipelines of a project.

        Args:
            project_id: Project identifier
            ref: Only pipelines for this branch or tag
            source: Only pipelines triggered by this source (push, schedule, ...)
            per_page: Page size
            max_pages: Maximum number of pages to fetch

        Returns:
            Pipelines in provider order (most recent first)
        """
        pass


class JobLister(ABC):
    """Lists jobs of a single pipeline."""

    @abstractmethod
    async def list_jobs(
        self,
        project_id: str,
        pipeline_id: int,
        scope: str,
        include_retried: bool = False,
        per_page: int = 100,
    ) -> list[Job]:
        """
        List jobs of a pipeline restricted to one scope.

        Args:
            project_id: Project identifier
            pipeline_id: Pipeline to list jobs from
            scope: Job status scope ("failed", "success", ...)
            include_retried: Whether to include retried jobs
            per_page: Page size

        Returns:
            Jobs in provider order
        """
        pass


class ArtifactDownloader(ABC):
    """Downloads single files out of a job's artifact archive."""

    @abstractmethod
    async def download_artifact(
        self, project_id: str, job_id: int, artifact_path: str
    ) -> bytes:
        """
        Download one file from a job's artifacts.

        Args:
            project_id: Project identifier
            job_id: Job that produced the artifacts
            artifact_path: Path of the file inside the artifact archive

        Returns:
            Raw file content

        Raises:
            Exception: Any transport failure
        """
        pass
