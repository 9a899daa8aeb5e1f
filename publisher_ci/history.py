"""
History continuity for GitLab CI.

Finds the same job in the previous pipeline of the current ref and pulls its
history artifact into the local report source tree, so trend charts carry
over from one pipeline to the next.
"""

import logging
from pathlib import Path

from publisher_common.errors import ArtifactDownloadError, NotEnoughPipelinesError
from publisher_common.models import HISTORY_FILE_NAME, CIContext, Job

from .interfaces import ArtifactDownloader, JobLister, PipelineLister

logger = logging.getLogger(__name__)

HISTORY_ARTIFACT_PATH = f"reports/history/{HISTORY_FILE_NAME}"
PAGE_SIZE = 100

# Failed jobs are searched first: a failed run is the latest attempt of the job.
JOB_SCOPES = ("failed", "success")


class GitLabHistoryResolver:
    """
    Resolves and downloads the history artifact of the previous pipeline.

    The resolution runs three steps:
    1. List pipelines for the current ref and source; the second one is the
       predecessor of the current pipeline
    2. Search the predecessor's jobs for the current job name, failed scope
       first, then success
    3. Download reports/history/history.json from the matched job and write
       it to the local history path
    """

    def __init__(
        self,
        context: CIContext,
        pipelines: PipelineLister,
        jobs: JobLister,
        artifacts: ArtifactDownloader,
    ):
        self.context = context
        self.pipelines = pipelines
        self.jobs = jobs
        self.artifacts = artifacts

    async def previous_pipeline_id(self) -> int:
        """
        Get the id of the pipeline that ran before the current one.

        Raises:
            NotEnoughPipelinesError: If fewer than two pipelines exist
        """
        pipelines = await self.pipelines.list_pipelines(
            self.context.project_id,
            ref=self.context.ref,
            source=self.context.pipeline_source,
            per_page=PAGE_SIZE,
            max_pages=1,
        )
        if len(pipelines) < 2:
            raise NotEnoughPipelinesError()
        return pipelines[1].id

    async def find_previous_job(self, pipeline_id: int) -> Job | None:
        """Find the job with the current job's name in the given pipeline."""
        for scope in JOB_SCOPES:
            jobs = await self.jobs.list_jobs(
                self.context.project_id,
                pipeline_id=pipeline_id,
                scope=scope,
                include_retried=False,
                per_page=PAGE_SIZE,
            )
            match = next((job for job in jobs if job.name == self.context.job_name), None)
            if match is not None:
                logger.debug(
                    f"Found {scope} job '{match.name}' ({match.id}) in pipeline {pipeline_id}"
                )
                return match
        return None

    async def download(self, history_path: Path) -> Path | None:
        """
        Download the previous run's history to history_path.

        Returns:
            The written path, or None if no matching job exists

        Raises:
            NotEnoughPipelinesError: If there is no previous pipeline
            ArtifactDownloadError: If the artifact download fails
        """
        pipeline_id = await self.previous_pipeline_id()
        job = await self.find_previous_job(pipeline_id)
        if job is None:
            logger.debug(
                f"No job named '{self.context.job_name}' found in pipeline {pipeline_id}, "
                "skipping history download"
            )
            return None

        try:
            content = await self.artifacts.download_artifact(
                self.context.project_id, job_id=job.id, artifact_path=HISTORY_ARTIFACT_PATH
            )
        except Exception as e:
            raise ArtifactDownloadError(
                f"Failed to download history artifact from job ID: '{job.id}'. Err: '{e}'"
            ) from e

        history_path.parent.mkdir(parents=True, exist_ok=True)
        history_path.write_bytes(content)
        logger.debug(f"Wrote history from job {job.id} to {history_path}")
        return history_path
