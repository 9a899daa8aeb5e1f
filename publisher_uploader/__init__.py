"""
Publisher Uploader module.

This module contains the uniform uploader contract and its backends:
object storage (S3 via boto3, GCS via google-cloud-storage) and GitLab
job artifacts.
"""

from .base import Uploader
from .gcs import GCSObjectStore
from .gitlab_artifacts import GitLabArtifactsUploader
from .object_storage import ObjectStorageUploader
from .object_store import ObjectStore
from .s3 import S3ObjectStore

__all__ = [
    "GCSObjectStore",
    "GitLabArtifactsUploader",
    "ObjectStorageUploader",
    "ObjectStore",
    "S3ObjectStore",
    "Uploader",
]
