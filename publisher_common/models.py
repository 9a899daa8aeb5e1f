"""
Data models for report publishing.

These models represent the domain objects shared by the history resolver,
the uploaders and the CLI, independent of any CI provider or storage backend.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

HISTORY_FILE_NAME = "history.json"


@dataclass(frozen=True)
class CIContext:
    """
    Immutable snapshot of the CI environment for the current run.

    Built once at process start and passed to every component that needs
    CI identifiers. Nothing downstream reads the environment directly.
    """

    provider: str  # "gitlab" or "github"
    project_id: str
    project_path: str  # group/subgroup/.../project
    pipeline_id: str
    job_name: str
    job_id: str
    ref: str = ""
    pipeline_source: str = ""
    server_url: str = ""
    pages_domain: str | None = None
    project_dir: str | None = None
    build_url: str | None = None  # Web URL of the pipeline / workflow run

    @property
    def top_group(self) -> str:
        """First segment of the project path."""
        return self.project_path.split("/")[0]

    @property
    def subgroup_path(self) -> str:
        """Project path without the top group."""
        return "/".join(self.project_path.split("/")[1:])


@dataclass(frozen=True)
class ReportBuild:
    """
    Local report tree produced by the report generator.

    Plugin order is significant: sub-report URLs are enumerated in this order.
    """

    report_path: Path
    history_path: Path
    plugins: tuple[str, ...] = ()


@dataclass(frozen=True)
class UploadTarget:
    """Destination of a report upload in object storage."""

    bucket: str
    prefix: str = ""
    copy_latest: bool = False

    def key(self, *parts: str) -> str:
        """Join prefix and key parts, skipping empty segments."""
        segments = [self.prefix.strip("/"), *(p.strip("/") for p in parts)]
        return "/".join(s for s in segments if s)

    def run_key(self, build_order: str, *parts: str) -> str:
        return self.key(build_order, *parts)

    def latest_key(self, *parts: str) -> str:
        return self.key("latest", *parts)

    @property
    def history_key(self) -> str:
        return self.key("history", HISTORY_FILE_NAME)


@dataclass
class ExecutorMetadata:
    """
    Provenance record written to each result directory as executor.json.

    The report generator picks it up and renders the CI build information
    in the report's executor widget.
    """

    name: str  # CI vendor label, e.g. "GitHub"
    type: str  # Lowercase vendor id, e.g. "github"
    report_url: str
    build_url: str
    build_order: str  # String form of a monotonically increasing counter
    build_name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to the executor.json format."""
        return {
            "name": self.name,
            "type": self.type,
            "reportUrl": self.report_url,
            "buildUrl": self.build_url,
            "buildOrder": self.build_order,
            "buildName": self.build_name,
        }


@dataclass(frozen=True)
class Pipeline:
    """GitLab pipeline identifier."""

    id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pipeline":
        return cls(id=data["id"])


@dataclass(frozen=True)
class Job:
    """GitLab job identifier, used to match the current job by name."""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Job":
        return cls(id=data["id"], name=data["name"])


@dataclass
class PublishResult:
    """Outcome of a publish run, handed to the notifier."""

    report_urls: list[str] = field(default_factory=list)
    metadata: ExecutorMetadata | None = None
    history_path: Path | None = None  # None when continuity was skipped
