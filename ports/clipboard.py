"""
Port interface for the system clipboard.

Implementations: WaylandClipboardAdapter (adapters/)
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class ClipboardPort(Protocol):
    """Read and write clipboard content."""

    def list_types(self) -> List[str]:
        """Return the MIME types currently offered by the clipboard."""
        ...

    def read_text(self) -> str:
        """Return the clipboard text, or an empty string when there is none."""
        ...

    def read_bytes(self, mime_type: str) -> bytes:
        """Return the clipboard payload for *mime_type*.

        Raises:
            ExternalServiceError: If the clipboard cannot be read.
        """
        ...

    def copy_text(self, text: str) -> None:
        """Place *text* on the clipboard.

        Raises:
            ExternalServiceError: If the clipboard cannot be written.
        """
        ...

    def copy_bytes(self, data: bytes, mime_type: Optional[str] = None) -> None:
        """Place raw *data* on the clipboard.

        Raises:
            ExternalServiceError: If the clipboard cannot be written.
        """
        ...
