"""Port interface for downloading remote content."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from domain.models import ResolvedArtifact


@runtime_checkable
class ContentFetcherPort(Protocol):
    """Retrieve a URL into a temporary local file."""

    def fetch(self, url: str) -> ResolvedArtifact:
        """Download *url*.

        Returns:
            A temporary artifact; the caller owns its deletion.

        Raises:
            DownloadFailedError: On transport failure or when a share page
                does not embed a direct media URL.
        """
        ...
