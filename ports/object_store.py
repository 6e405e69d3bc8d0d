"""
Port interface for object storage.

Implementations: S3ObjectStoreAdapter (adapters/)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ObjectStorePort(Protocol):
    """Abstract interface for publishing local files to a bucket."""

    def upload_file(self, local_path: str, key: str) -> str:
        """Copy a local file to ``{bucket}/{key}``.

        Args:
            local_path: File to upload.
            key: Object key inside the configured bucket.

        Returns:
            Canonical URI of the stored object (e.g. s3://bucket/key).

        Raises:
            UploadFailedError: If the store rejects or fails the upload.
        """
        ...
