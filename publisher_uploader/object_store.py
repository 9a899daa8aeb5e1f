"""
Abstract object store interface.

This module defines the contract that any object storage backend must follow,
allowing the object storage uploader to work with S3, GCS or a test double.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class ObjectStore(ABC):
    """
    Abstract base class for a single bucket of object storage.

    Implementations must be safe to call concurrently from multiple tasks.
    """

    bucket: str

    @abstractmethod
    async def upload_file(
        self,
        path: Path,
        key: str,
        content_type: str | None = None,
        cache_control: str | None = None,
    ) -> None:
        """
        Upload a local file.

        Args:
            path: Local file to upload
            key: Destination object key
            content_type: Optional Content-Type of the object
            cache_control: Optional Cache-Control header of the object

        Raises:
            Exception: Any transport failure
        """
        pass

    @abstractmethod
    async def download(self, key: str) -> bytes | None:
        """
        Download an object.

        Args:
            key: Object key

        Returns:
            Object content, or None if the object does not exist

        Raises:
            Exception: Any transport failure other than a missing object
        """
        pass

    @abstractmethod
    def url_for(self, key: str) -> str:
        """
        Get the public URL of an object.

        Args:
            key: Object key

        Returns:
            URL under which the object is served
        """
        pass
