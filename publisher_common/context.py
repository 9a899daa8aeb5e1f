"""
CI context resolution.

Reads the CI provider's environment variables once and turns them into an
immutable CIContext. Everything downstream receives the context explicitly.
"""

import os
from collections.abc import Mapping

from .errors import ConfigurationError
from .models import CIContext

GITLAB_REQUIRED = (
    "CI_PROJECT_ID",
    "CI_PROJECT_PATH",
    "CI_PIPELINE_ID",
    "CI_JOB_ID",
    "CI_JOB_NAME",
    "CI_SERVER_URL",
)

GITHUB_REQUIRED = (
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
    "GITHUB_JOB",
    "GITHUB_SERVER_URL",
)


def detect_provider(env: Mapping[str, str]) -> str:
    """
    Detect the CI provider from well-known marker variables.

    Raises:
        ConfigurationError: If the process is not running in a supported CI
    """
    if env.get("GITLAB_CI") == "true":
        return "gitlab"
    if env.get("GITHUB_ACTIONS") == "true":
        return "github"
    raise ConfigurationError(
        "Unsupported CI environment: expected GitLab CI or GitHub Actions"
    )


def _require(env: Mapping[str, str], names: tuple[str, ...]) -> None:
    missing = [name for name in names if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required CI environment variables: {', '.join(missing)}"
        )


def _gitlab_context(env: Mapping[str, str]) -> CIContext:
    _require(env, GITLAB_REQUIRED)
    return CIContext(
        provider="gitlab",
        project_id=env["CI_PROJECT_ID"],
        project_path=env["CI_PROJECT_PATH"],
        pipeline_id=env["CI_PIPELINE_ID"],
        job_name=env["CI_JOB_NAME"],
        job_id=env["CI_JOB_ID"],
        ref=env.get("CI_COMMIT_REF_NAME", ""),
        pipeline_source=env.get("CI_PIPELINE_SOURCE", ""),
        server_url=env["CI_SERVER_URL"],
        pages_domain=env.get("CI_PAGES_DOMAIN") or None,
        project_dir=env.get("CI_PROJECT_DIR") or None,
        build_url=env.get("CI_PIPELINE_URL") or None,
    )


def _github_context(env: Mapping[str, str]) -> CIContext:
    _require(env, GITHUB_REQUIRED)
    server_url = env["GITHUB_SERVER_URL"].rstrip("/")
    repository = env["GITHUB_REPOSITORY"]
    run_id = env["GITHUB_RUN_ID"]
    return CIContext(
        provider="github",
        project_id=env.get("GITHUB_REPOSITORY_ID") or repository,
        project_path=repository,
        pipeline_id=run_id,
        job_name=env["GITHUB_JOB"],
        job_id=run_id,
        ref=env.get("GITHUB_REF_NAME", ""),
        pipeline_source=env.get("GITHUB_EVENT_NAME", ""),
        server_url=server_url,
        project_dir=env.get("GITHUB_WORKSPACE") or None,
        build_url=f"{server_url}/{repository}/actions/runs/{run_id}",
    )


def resolve_ci_context(
    env: Mapping[str, str] | None = None, provider: str | None = None
) -> CIContext:
    """
    Build a CIContext from CI environment variables.

    Args:
        env: Variables to read (defaults to os.environ)
        provider: Force a provider ("gitlab" or "github") instead of detecting it

    Returns:
        Immutable CI context for the current run

    Raises:
        ConfigurationError: If the provider is unknown or required values are missing
    """
    env = os.environ if env is None else env
    provider = provider or detect_provider(env)

    if provider == "gitlab":
        return _gitlab_context(env)
    if provider == "github":
        return _github_context(env)
    raise ConfigurationError(f"Unsupported CI provider: {provider}")


class CIContextResolver:
    """
    Caching wrapper around resolve_ci_context.

    The context is resolved on first use and reused afterwards. reset()
    drops the cached value so the next resolve() reads the environment again.
    """

    def __init__(self, env: Mapping[str, str] | None = None, provider: str | None = None):
        self._env = env
        self._provider = provider
        self._context: CIContext | None = None

    def resolve(self) -> CIContext:
        if self._context is None:
            self._context = resolve_ci_context(self._env, self._provider)
        return self._context

    def reset(self) -> None:
        self._context = None
