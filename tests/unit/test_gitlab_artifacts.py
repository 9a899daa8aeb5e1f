"""
Unit tests for GitLabArtifactsUploader and the GitLab report URL resolver.
"""

import dataclasses
import logging
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from publisher_ci.history import GitLabHistoryResolver
from publisher_ci.urls import GitLabReportUrlResolver, is_valid_url, relative_report_path
from publisher_common.context import resolve_ci_context
from publisher_common.errors import ArtifactDownloadError, NotEnoughPipelinesError
from publisher_common.models import Job, Pipeline, ReportBuild
from publisher_uploader.gitlab_artifacts import GitLabArtifactsUploader

HISTORY_PATH = Path("/builds/group/project/reports/history/history.json")
REPORT_PATH = Path("/builds/group/project/reports/allure")


@pytest.fixture
def mock_client():
    client = AsyncMock()
    client.list_pipelines = AsyncMock(return_value=[])
    client.list_jobs = AsyncMock(return_value=[])
    client.download_artifact = AsyncMock()
    return client


def make_uploader(context, client, plugins=("plugin-a",), history_path=HISTORY_PATH):
    return GitLabArtifactsUploader(
        context,
        ReportBuild(report_path=REPORT_PATH, history_path=history_path, plugins=tuple(plugins)),
        GitLabHistoryResolver(context, pipelines=client, jobs=client, artifacts=client),
    )


class TestReportUrl:
    """Test suite for GitLabArtifactsUploader.report_url."""

    def test_returns_pages_domain_report_url(self, gitlab_context, mock_client):
        """Test the main artifacts report URL on a custom pages domain."""
        uploader = make_uploader(gitlab_context, mock_client, ["plugin-a", "plugin-b"])

        assert uploader.report_url() == (
            "https://group.pages.example.com/-/jobs/101/artifacts/reports/allure/index.html"
        )

    def test_uses_fallback_url_when_server_url_is_invalid(self, gitlab_env, mock_client):
        """Test the gitlab.io URL format when the server URL is malformed."""
        gitlab_env["CI_PROJECT_PATH"] = "group/sub/project"
        gitlab_env["CI_SERVER_URL"] = "::invalid::"
        del gitlab_env["CI_PAGES_DOMAIN"]
        uploader = make_uploader(resolve_ci_context(gitlab_env), mock_client)

        assert uploader.report_url() == (
            "https://group.gitlab.io/-/sub/project/-/jobs/101/artifacts/reports/allure/index.html"
        )

    def test_uses_fallback_url_without_pages_domain(self, gitlab_context, mock_client):
        context = dataclasses.replace(gitlab_context, pages_domain=None)
        uploader = make_uploader(context, mock_client)

        assert uploader.report_url() == (
            "https://group.gitlab.io/-/subgroup/project/-/jobs/101/artifacts/reports/allure/index.html"
        )

    def test_plugin_report_url(self, gitlab_context, mock_client):
        uploader = make_uploader(gitlab_context, mock_client)

        assert uploader.report_url("plugin-a") == (
            "https://group.pages.example.com/-/jobs/101/artifacts/reports/allure/plugin-a/index.html"
        )

    def test_report_urls_follow_plugin_order(self, gitlab_context, mock_client):
        uploader = make_uploader(gitlab_context, mock_client, ["zeta", "alpha"])

        urls = uploader.report_urls()

        assert len(urls) == 3
        assert urls[1].endswith("/reports/allure/zeta/index.html")
        assert urls[2].endswith("/reports/allure/alpha/index.html")


class TestOutputReportUrls:
    """Test suite for GitLabArtifactsUploader.output_report_urls."""

    def test_logs_all_report_urls(self, gitlab_context, mock_client, caplog):
        """Test that the primary URL and every plugin URL are logged."""
        caplog.set_level(logging.INFO, logger="publisher_uploader.base")
        uploader = make_uploader(gitlab_context, mock_client, ["plugin-a", "plugin-b"])

        uploader.output_report_urls()

        messages = [r.getMessage() for r in caplog.records if r.name == "publisher_uploader.base"]
        assert messages == [
            "- https://group.pages.example.com/-/jobs/101/artifacts/reports/allure/index.html",
            "- https://group.pages.example.com/-/jobs/101/artifacts/reports/allure/plugin-a/index.html",
            "- https://group.pages.example.com/-/jobs/101/artifacts/reports/allure/plugin-b/index.html",
        ]

    def test_logs_only_primary_url_without_plugins(self, gitlab_context, mock_client, caplog):
        caplog.set_level(logging.INFO, logger="publisher_uploader.base")
        uploader = make_uploader(gitlab_context, mock_client, [])

        uploader.output_report_urls()

        records = [r for r in caplog.records if r.name == "publisher_uploader.base"]
        assert len(records) == 1


class TestDownloadHistory:
    """Test suite for GitLabArtifactsUploader.download_history."""

    @pytest.mark.asyncio
    async def test_downloads_history_from_previous_pipeline_job(
        self, gitlab_context, mock_client, tmp_path
    ):
        history_path = tmp_path / "reports" / "history" / "history.json"
        mock_client.list_pipelines.return_value = [Pipeline(200), Pipeline(199)]
        mock_client.list_jobs.side_effect = [[Job(555, "test-job")]]
        mock_client.download_artifact.return_value = b'{"uuid":"test-uuid"}'
        uploader = make_uploader(gitlab_context, mock_client, history_path=history_path)

        result = await uploader.download_history()

        assert result == history_path
        assert history_path.read_text() == '{"uuid":"test-uuid"}'
        mock_client.list_pipelines.assert_called_once_with(
            "123", ref="main", source="push", per_page=100, max_pages=1
        )
        mock_client.download_artifact.assert_called_once_with(
            "123", job_id=555, artifact_path="reports/history/history.json"
        )

    @pytest.mark.asyncio
    async def test_raises_when_not_enough_pipelines(self, gitlab_context, mock_client):
        mock_client.list_pipelines.return_value = [Pipeline(200)]
        uploader = make_uploader(gitlab_context, mock_client)

        with pytest.raises(NotEnoughPipelinesError, match="Not enough pipelines found"):
            await uploader.download_history()

    @pytest.mark.asyncio
    async def test_raises_wrapped_error_when_download_fails(
        self, gitlab_context, mock_client, tmp_path
    ):
        mock_client.list_pipelines.return_value = [Pipeline(200), Pipeline(199)]
        mock_client.list_jobs.side_effect = [[Job(555, "test-job")]]
        mock_client.download_artifact.side_effect = RuntimeError("network failure")
        uploader = make_uploader(gitlab_context, mock_client, history_path=tmp_path / "h.json")

        with pytest.raises(
            ArtifactDownloadError,
            match="Failed to download history artifact from job ID: '555'. Err: 'network failure'",
        ):
            await uploader.download_history()


class TestUpload:
    """Test suite for GitLabArtifactsUploader.upload."""

    @pytest.mark.asyncio
    async def test_upload_returns_report_url_without_transfers(self, gitlab_context, mock_client):
        uploader = make_uploader(gitlab_context, mock_client)

        url = await uploader.upload()

        assert url == uploader.report_url()
        mock_client.download_artifact.assert_not_called()


class TestUrlHelpers:
    """Test suite for URL helper functions."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://gitlab.example.com", True),
            ("http://localhost:8080", True),
            ("::invalid::", False),
            ("gitlab.example.com", False),
            ("", False),
        ],
    )
    def test_is_valid_url(self, url, expected):
        assert is_valid_url(url) is expected

    def test_relative_report_path_inside_project_dir(self):
        assert relative_report_path(REPORT_PATH, "/builds/group/project") == "reports/allure"

    def test_relative_report_path_outside_project_dir(self):
        assert relative_report_path(Path("/tmp/report"), "/builds/group/project") == "tmp/report"

    def test_relative_report_path_already_relative(self):
        assert relative_report_path(Path("reports/allure"), None) == "reports/allure"

    def test_relative_report_path_for_project_dir(self):
        assert relative_report_path(Path("/builds/group/project"), "/builds/group/project") == ""

    def test_report_in_project_dir_url(self, gitlab_context):
        resolver = GitLabReportUrlResolver(gitlab_context, Path("/builds/group/project"))

        assert resolver.report_url("plugin-a") == (
            "https://group.pages.example.com/-/jobs/101/artifacts/plugin-a/index.html"
        )

    def test_resolver_for_top_level_project(self, gitlab_context):
        context = dataclasses.replace(gitlab_context, project_path="project", pages_domain=None)
        resolver = GitLabReportUrlResolver(context, REPORT_PATH)

        assert resolver.report_url() == (
            "https://project.gitlab.io/-/jobs/101/artifacts/reports/allure/index.html"
        )
