"""
Standalone entrypoint for running the publisher as a module.

Usage:
    python -m publisher_cli upload s3 --bucket my-reports
"""

from .cli import main

if __name__ == "__main__":
    main()
