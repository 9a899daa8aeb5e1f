"""
GitLab job artifact report URLs.

Artifacts of public projects are browsable through GitLab Pages under the
project's top group domain. The URL shape depends on whether the instance
publishes a custom pages domain.
"""

from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from publisher_common.models import CIContext

FALLBACK_PAGES_DOMAIN = "gitlab.io"


def is_valid_url(url: str) -> bool:
    """Check that url has an http(s) scheme and a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def relative_report_path(report_path: Path, project_dir: str | None) -> str:
    """
    Path of the report inside the job's artifacts.

    Artifacts are stored relative to the project directory; paths outside of
    it are used as given, without a leading slash. The project directory
    itself maps to an empty path.
    """
    path = PurePosixPath(Path(report_path).as_posix())
    if project_dir:
        try:
            path = path.relative_to(PurePosixPath(Path(project_dir).as_posix()))
        except ValueError:
            pass
    relative = str(path).lstrip("/")
    return "" if relative == "." else relative


class GitLabReportUrlResolver:
    """Builds primary and per-plugin artifact report URLs for a GitLab job."""

    def __init__(self, context: CIContext, report_path: Path):
        self.context = context
        self.artifact_path = relative_report_path(report_path, context.project_dir)

    def _uses_pages_domain(self) -> bool:
        return bool(self.context.pages_domain) and is_valid_url(self.context.server_url)

    def base_url(self) -> str:
        ctx = self.context
        if self._uses_pages_domain():
            return f"https://{ctx.top_group}.{ctx.pages_domain}/-/jobs/{ctx.job_id}/artifacts"

        host = f"https://{ctx.top_group}.{FALLBACK_PAGES_DOMAIN}"
        if ctx.subgroup_path:
            host = f"{host}/-/{ctx.subgroup_path}"
        return f"{host}/-/jobs/{ctx.job_id}/artifacts"

    def report_url(self, plugin: str | None = None) -> str:
        parts = [self.base_url(), self.artifact_path]
        if plugin:
            parts.append(plugin)
        parts.append("index.html")
        return "/".join(p for p in parts if p)
