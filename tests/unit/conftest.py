"""Shared fixtures for unit tests: CI environments and resolved contexts."""

import pytest

from publisher_common.context import resolve_ci_context

GITLAB_ENV = {
    "GITLAB_CI": "true",
    "CI_COMMIT_REF_NAME": "main",
    "CI_JOB_NAME": "test-job",
    "CI_JOB_ID": "101",
    "CI_PAGES_DOMAIN": "pages.example.com",
    "CI_PIPELINE_SOURCE": "push",
    "CI_PROJECT_ID": "123",
    "CI_PROJECT_PATH": "group/subgroup/project",
    "CI_PIPELINE_ID": "200",
    "CI_SERVER_URL": "https://gitlab.example.com",
    "CI_PROJECT_DIR": "/builds/group/project",
}

GITHUB_ENV = {
    "GITHUB_ACTIONS": "true",
    "GITHUB_REPOSITORY": "owner/repo",
    "GITHUB_REPOSITORY_ID": "987",
    "GITHUB_RUN_ID": "123",
    "GITHUB_JOB": "test-job",
    "GITHUB_SERVER_URL": "https://github.com",
    "GITHUB_REF_NAME": "main",
    "GITHUB_EVENT_NAME": "pull_request",
    "GITHUB_WORKSPACE": "/home/runner/work/repo/repo",
}


@pytest.fixture
def gitlab_env():
    """GitLab CI environment of job 101 in pipeline 200."""
    return dict(GITLAB_ENV)


@pytest.fixture
def github_env():
    """GitHub Actions environment of run 123."""
    return dict(GITHUB_ENV)


@pytest.fixture
def gitlab_context(gitlab_env):
    return resolve_ci_context(gitlab_env)


@pytest.fixture
def github_context(github_env):
    return resolve_ci_context(github_env)
