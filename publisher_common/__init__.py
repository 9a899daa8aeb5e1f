"""
Publisher Common module.

This module contains the domain models, error taxonomy and CI context
resolution shared by the other publisher_* packages.

The common module has no dependencies on other publisher_* modules, making
it a pure domain layer that can be imported by any component.
"""

from .context import CIContextResolver, resolve_ci_context
from .errors import (
    ArtifactDownloadError,
    ConfigurationError,
    GitLabAPIError,
    MissingResultsError,
    NotEnoughPipelinesError,
    PublisherError,
    ReportGenerationError,
    UploadError,
)
from .models import (
    CIContext,
    ExecutorMetadata,
    Job,
    Pipeline,
    PublishResult,
    ReportBuild,
    UploadTarget,
)

__all__ = [
    "ArtifactDownloadError",
    "CIContext",
    "CIContextResolver",
    "ConfigurationError",
    "ExecutorMetadata",
    "GitLabAPIError",
    "Job",
    "MissingResultsError",
    "NotEnoughPipelinesError",
    "Pipeline",
    "PublishResult",
    "PublisherError",
    "ReportBuild",
    "ReportGenerationError",
    "UploadError",
    "UploadTarget",
    "resolve_ci_context",
]
