"""
Port interface for in-place metadata removal.

Implementations: ExifToolMetadataStripper (adapters/)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetadataStripperPort(Protocol):
    """Best-effort EXIF stripping."""

    def strip(self, path: str) -> bool:
        """Remove metadata from *path* in place.

        Returns:
            True if metadata was found and removed, False otherwise.
            Failures are logged by the implementation, never raised.
        """
        ...
