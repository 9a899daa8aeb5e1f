"""
Report generator wrapper.

The HTML report is built by the allure command line tool. This module only
runs it as a subprocess and turns a failed run into a ReportGenerationError.
"""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from publisher_common.errors import ReportGenerationError

logger = logging.getLogger(__name__)


class AllureReportGenerator:
    """Runs `allure generate` over a set of result directories."""

    def __init__(
        self,
        report_path: Path,
        command: Sequence[str] = ("allure",),
        config_path: str | None = None,
        report_name: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            report_path: Output directory of the generated report
            command: Executable (and leading arguments) of the allure CLI
            config_path: Optional allure config file
            report_name: Optional report title
        """
        self.report_path = report_path
        self.command = list(command)
        self.config_path = config_path
        self.report_name = report_name

    def build_args(self, result_dirs: Sequence[Path]) -> list[str]:
        args = [*self.command, "generate", *(str(d) for d in result_dirs)]
        args += ["--output", str(self.report_path)]
        if self.config_path:
            args += ["--config", self.config_path]
        if self.report_name:
            args += ["--report-name", self.report_name]
        return args

    async def generate(self, result_dirs: Sequence[Path]) -> Path:
        """
        Generate the report.

        Args:
            result_dirs: Result directories to build the report from

        Returns:
            Path of the generated report

        Raises:
            ReportGenerationError: If the generator cannot be started or fails
        """
        args = self.build_args(result_dirs)
        logger.debug(f"Running report generator: {' '.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ReportGenerationError(f"Failed to start report generator: {e}") from e

        stdout, stderr = await process.communicate()
        if stdout:
            logger.debug(stdout.decode(errors="replace").rstrip())

        if process.returncode != 0:
            raise ReportGenerationError(
                f"Report generation failed with exit code {process.returncode}: "
                f"{stderr.decode(errors='replace').strip()}"
            )

        logger.info(f"Generated report in {self.report_path}")
        return self.report_path
