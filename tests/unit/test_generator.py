"""
Unit tests for publisher_cli.generator module.

Tests the allure subprocess wrapper with mocked subprocess calls.
"""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from publisher_cli.generator import AllureReportGenerator
from publisher_common.errors import ReportGenerationError


def make_process(returncode=0, stdout=b"Report successfully generated\n", stderr=b""):
    process = AsyncMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


class TestAllureReportGenerator:
    """Test suite for AllureReportGenerator class."""

    def test_build_args(self):
        generator = AllureReportGenerator(Path("reports/allure"))

        args = generator.build_args([Path("a/allure-results"), Path("b/allure-results")])

        assert args == [
            "allure",
            "generate",
            "a/allure-results",
            "b/allure-results",
            "--output",
            "reports/allure",
        ]

    def test_build_args_with_command_and_config(self):
        generator = AllureReportGenerator(
            Path("out"), command=["npx", "allure"], config_path="allurerc.mjs"
        )

        args = generator.build_args([Path("results")])

        assert args == [
            "npx",
            "allure",
            "generate",
            "results",
            "--output",
            "out",
            "--config",
            "allurerc.mjs",
        ]

    def test_build_args_with_report_name(self):
        generator = AllureReportGenerator(Path("out"), report_name="unit-test-report")

        args = generator.build_args([Path("results")])

        assert args == [
            "allure",
            "generate",
            "results",
            "--output",
            "out",
            "--report-name",
            "unit-test-report",
        ]

    @pytest.mark.asyncio
    async def test_successful_generation(self):
        generator = AllureReportGenerator(Path("out"))
        process = make_process()

        with patch("asyncio.create_subprocess_exec", return_value=process) as mock_exec:
            result = await generator.generate([Path("results")])

        assert result == Path("out")
        args, _ = mock_exec.call_args
        assert args == ("allure", "generate", "results", "--output", "out")

    @pytest.mark.asyncio
    async def test_failed_generation_raises(self):
        generator = AllureReportGenerator(Path("out"))
        process = make_process(returncode=1, stderr=b"results directory is empty\n")

        with patch("asyncio.create_subprocess_exec", return_value=process):
            with pytest.raises(ReportGenerationError) as exc_info:
                await generator.generate([Path("results")])

        assert "exit code 1" in str(exc_info.value)
        assert "results directory is empty" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_executable_raises(self):
        generator = AllureReportGenerator(Path("out"), command=["does-not-exist"])

        with patch(
            "asyncio.create_subprocess_exec",
            side_effect=FileNotFoundError("No such file or directory: 'does-not-exist'"),
        ):
            with pytest.raises(ReportGenerationError, match="Failed to start report generator"):
                await generator.generate([Path("results")])
