"""
Publisher CLI module.

This module contains the command line entrypoint, environment-backed
settings, the report generator wrapper and the publish flow that ties the
uploader backends together.
"""

from .generator import AllureReportGenerator
from .publish import Notifier, find_result_dirs, publish

__all__ = ["AllureReportGenerator", "Notifier", "find_result_dirs", "publish"]
