"""
Error taxonomy for report publishing.

All errors derive from PublisherError so the CLI can report them uniformly.
A missing history job match has no error type: it only produces a debug
log entry.
"""


class PublisherError(RuntimeError):
    """Base class for all publishing failures."""


class ConfigurationError(PublisherError):
    """Required CI environment values or storage credentials are missing."""


class NotEnoughPipelinesError(PublisherError):
    """Fewer than two pipelines were found when resolving history continuity."""

    def __init__(self, message: str = "Not enough pipelines found"):
        super().__init__(message)


class ArtifactDownloadError(PublisherError):
    """Transport failure while fetching the history artifact."""


class UploadError(PublisherError):
    """Transport failure while uploading the report tree."""


class MissingResultsError(PublisherError):
    """The results glob did not match any directory."""


class ReportGenerationError(PublisherError):
    """The external report generator failed."""


class GitLabAPIError(PublisherError):
    """A GitLab REST API request failed."""
