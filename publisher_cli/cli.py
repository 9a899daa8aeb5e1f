"""
Allure publisher CLI.

Generates an allure report from test results, carries history over from the
previous run and publishes the report to S3, GCS or GitLab job artifacts.

Usage:
    allure-publisher upload s3 --bucket my-reports --prefix my-project
    allure-publisher upload gcs --bucket my-reports --copy-latest
    allure-publisher upload gitlab-artifacts --plugin awesome --plugin dashboard
"""

import asyncio
import functools
import logging
import sys
from pathlib import Path

import click

from publisher_ci.executor import build_executor_metadata
from publisher_ci.gitlab_client import GitLabClient
from publisher_ci.history import GitLabHistoryResolver
from publisher_common.context import CIContextResolver
from publisher_common.errors import PublisherError
from publisher_common.models import CIContext, ReportBuild, UploadTarget
from publisher_uploader.base import Uploader
from publisher_uploader.gcs import GCSObjectStore
from publisher_uploader.gitlab_artifacts import GitLabArtifactsUploader
from publisher_uploader.object_storage import ObjectStorageUploader
from publisher_uploader.object_store import ObjectStore
from publisher_uploader.s3 import S3ObjectStore

from .generator import AllureReportGenerator
from .publish import find_result_dirs, publish
from .settings import (
    get_allure_command,
    get_gitlab_tokens,
    get_s3_endpoint,
    get_s3_region,
    get_upload_concurrency,
)

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_async(coro):
    """Helper to run async functions in CLI commands."""
    return asyncio.run(coro)


def common_options(func):
    """Options shared by every upload command."""
    options = [
        click.option(
            "--results-glob",
            default="./**/allure-results",
            show_default=True,
            help="Glob pattern matching allure result directories",
        ),
        click.option(
            "--report-path",
            default="reports/allure",
            show_default=True,
            type=click.Path(path_type=Path),
            help="Output directory of the generated report",
        ),
        click.option(
            "--history-path",
            default="reports/history/history.json",
            show_default=True,
            type=click.Path(path_type=Path),
            help="Local history file read and written by the report generator",
        ),
        click.option(
            "--plugin",
            "plugins",
            multiple=True,
            help="Report plugin with its own sub-report, may be repeated",
        ),
        click.option("--config", "config_path", help="Allure configuration file"),
        click.option("--report-name", help="Title of the generated report"),
        click.option(
            "--ignore-missing-history",
            is_flag=True,
            help="Continue without history when there is no previous pipeline",
        ),
        click.option("--debug", is_flag=True, help="Enable debug logging"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def bucket_options(func):
    """Options shared by object storage upload commands."""
    options = [
        click.option("--bucket", required=True, help="Bucket name"),
        click.option("--prefix", default="", help="Key prefix inside the bucket"),
        click.option(
            "--copy-latest",
            is_flag=True,
            help="Also copy the report to <prefix>/latest",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def handle_errors(func):
    """Report publisher errors on stderr and exit non-zero."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PublisherError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except KeyboardInterrupt:
            click.echo("\n\nUpload cancelled by user.", err=True)
            sys.exit(130)

    return wrapper


def run_upload(
    context: CIContext,
    uploader: Uploader,
    results_glob: str,
    config_path: str | None,
    report_name: str | None,
    ignore_missing_history: bool,
) -> None:
    result_dirs = find_result_dirs(results_glob)
    logger.debug(f"Found result directories: {', '.join(str(d) for d in result_dirs)}")

    generator = AllureReportGenerator(
        uploader.build.report_path,
        command=get_allure_command(),
        config_path=config_path,
        report_name=report_name,
    )
    run_async(
        publish(
            uploader,
            generator,
            result_dirs,
            functools.partial(build_executor_metadata, context),
            ignore_missing_history=ignore_missing_history,
        )
    )


def upload_to_bucket(
    store_factory,
    results_glob: str,
    report_path: Path,
    history_path: Path,
    plugins: tuple[str, ...],
    config_path: str | None,
    report_name: str | None,
    ignore_missing_history: bool,
    debug: bool,
    bucket: str,
    prefix: str,
    copy_latest: bool,
) -> None:
    configure_logging(debug)
    context = CIContextResolver().resolve()
    store: ObjectStore = store_factory(bucket)
    uploader = ObjectStorageUploader(
        context,
        ReportBuild(report_path=report_path, history_path=history_path, plugins=plugins),
        UploadTarget(bucket=bucket, prefix=prefix, copy_latest=copy_latest),
        store,
        concurrency=get_upload_concurrency(),
    )
    run_upload(context, uploader, results_glob, config_path, report_name, ignore_missing_history)
    if copy_latest:
        logger.info(f"Latest report: {uploader.latest_report_url()}")


@click.group()
def cli():
    """Allure Publisher - Publish allure reports with history from CI."""
    pass


@cli.group()
def upload():
    """Generate and upload allure reports."""
    pass


@upload.command("s3")
@common_options
@bucket_options
@handle_errors
def upload_s3(**options):
    """Generate and upload allure report to s3 bucket."""

    def store_factory(bucket: str) -> ObjectStore:
        return S3ObjectStore(bucket, endpoint=get_s3_endpoint(), region=get_s3_region())

    upload_to_bucket(store_factory, **options)


@upload.command("gcs")
@common_options
@bucket_options
@handle_errors
def upload_gcs(**options):
    """Generate and upload allure report to gcs bucket."""
    upload_to_bucket(GCSObjectStore, **options)


@upload.command("gitlab-artifacts")
@common_options
@handle_errors
def upload_gitlab_artifacts(
    results_glob: str,
    report_path: Path,
    history_path: Path,
    plugins: tuple[str, ...],
    config_path: str | None,
    report_name: str | None,
    ignore_missing_history: bool,
    debug: bool,
):
    """Generate report and output GitLab CI artifacts links."""
    configure_logging(debug)
    context = CIContextResolver(provider="gitlab").resolve()

    private_token, job_token = get_gitlab_tokens()
    client = GitLabClient(context.server_url, private_token=private_token, job_token=job_token)
    uploader = GitLabArtifactsUploader(
        context,
        ReportBuild(report_path=report_path, history_path=history_path, plugins=plugins),
        GitLabHistoryResolver(context, pipelines=client, jobs=client, artifacts=client),
    )
    run_upload(context, uploader, results_glob, config_path, report_name, ignore_missing_history)


def main():
    """Main entry point for the publisher CLI."""
    cli()


if __name__ == "__main__":
    main()
