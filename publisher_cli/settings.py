"""
Environment-backed settings for the publisher CLI.

Command-line options take precedence; these helpers supply the values
that are normally provided by the CI job's environment.

Environment Variables:
    GITLAB_AUTH_TOKEN: Access token for the GitLab API (read_api scope)
    CI_JOB_TOKEN: Job token, used when GITLAB_AUTH_TOKEN is not set
    AWS_ENDPOINT: Custom S3 endpoint (minio, localstack, ...)
    AWS_REGION / AWS_DEFAULT_REGION: S3 region
    ALLURE_COMMAND: Report generator executable (default: allure)
    PUBLISHER_UPLOAD_CONCURRENCY: Concurrent object uploads (default: 8)
"""

import logging
import os
import shlex

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_CONCURRENCY = 8


def get_gitlab_tokens() -> tuple[str | None, str | None]:
    """
    Get GitLab API credentials.

    Returns:
        Tuple of (private_token, job_token); either may be None
    """
    return os.environ.get("GITLAB_AUTH_TOKEN") or None, os.environ.get("CI_JOB_TOKEN") or None


def get_s3_endpoint() -> str | None:
    """Get the custom S3 endpoint, if any."""
    return os.environ.get("AWS_ENDPOINT") or None


def get_s3_region() -> str | None:
    """Get the S3 region from AWS_REGION or AWS_DEFAULT_REGION."""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or None


def get_allure_command() -> list[str]:
    """
    Get the report generator command.

    Returns:
        Command split into arguments, e.g. ["npx", "allure"]
    """
    return shlex.split(os.environ.get("ALLURE_COMMAND", "allure"))


def get_upload_concurrency() -> int:
    """
    Get the number of concurrent object uploads.

    Returns:
        Positive concurrency, falling back to the default for invalid values
    """
    raw = os.environ.get("PUBLISHER_UPLOAD_CONCURRENCY", str(DEFAULT_UPLOAD_CONCURRENCY))
    try:
        concurrency = int(raw)
    except ValueError:
        logger.warning(
            f"Invalid PUBLISHER_UPLOAD_CONCURRENCY={raw}, "
            f"using default {DEFAULT_UPLOAD_CONCURRENCY}"
        )
        return DEFAULT_UPLOAD_CONCURRENCY

    if concurrency <= 0:
        logger.warning(
            f"Invalid PUBLISHER_UPLOAD_CONCURRENCY={concurrency}, "
            f"using default {DEFAULT_UPLOAD_CONCURRENCY}"
        )
        return DEFAULT_UPLOAD_CONCURRENCY
    return concurrency
