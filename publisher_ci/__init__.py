"""
Publisher CI module.

This module contains everything that talks to, or derives addresses from,
a CI provider: collaborator interfaces, the GitLab API client, history
continuity, artifact report URLs and executor metadata.
"""

from .executor import build_executor_metadata, write_executor_metadata
from .gitlab_client import GitLabClient
from .history import GitLabHistoryResolver
from .interfaces import ArtifactDownloader, JobLister, PipelineLister
from .urls import GitLabReportUrlResolver

__all__ = [
    "ArtifactDownloader",
    "GitLabClient",
    "GitLabHistoryResolver",
    "GitLabReportUrlResolver",
    "JobLister",
    "PipelineLister",
    "build_executor_metadata",
    "write_executor_metadata",
]
