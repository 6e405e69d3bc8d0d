"""
Port interfaces for desktop collaborators.

Implementations (adapters/desktop.py):
    NotifySendNotifier, PipeWireSoundPlayer, SpectacleScreenshotTool, ZenityConfirmation
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from domain.models import SoundCue


@runtime_checkable
class NotifierPort(Protocol):
    """Desktop notifications. Best-effort: implementations never raise."""

    def notify(self, title: str, message: str, icon: str = "image-x-generic") -> None:
        ...


@runtime_checkable
class SoundPlayerPort(Protocol):
    """Fire-and-forget audio feedback."""

    def play(self, cue: SoundCue) -> None:
        """Start playing *cue* without waiting for it to finish."""
        ...


@runtime_checkable
class ScreenshotPort(Protocol):
    """Interactive region capture."""

    def capture(self, output_path: str) -> bool:
        """Capture a region into *output_path*.

        Returns:
            True if a screenshot was written; False when the user cancelled
            or the capture timed out.
        """
        ...


@runtime_checkable
class ConfirmationPort(Protocol):
    """Yes/no prompt shown before uploading a large file."""

    def confirm_large_upload(self, file_name: str, formatted_size: str) -> bool:
        ...
