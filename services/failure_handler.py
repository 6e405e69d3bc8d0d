"""
Failure handler — the single place upload-path errors end up.

Plays the error cue, then either copies the local artifact to the clipboard
as a degraded fallback or shows a plain failure notification.
"""

from __future__ import annotations

import mimetypes
import os

from domain.models import SoundCue
from ports.clipboard import ClipboardPort
from ports.desktop import NotifierPort, SoundPlayerPort
from shared_utils.constants import LogScope
from shared_utils.error_handler import AppException, ExternalServiceError, log_exception
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.ERROR_HANDLER)


class FailureHandler:
    """Audible + notification + clipboard-fallback handling for AppExceptions."""

    def __init__(
        self,
        sound_player: SoundPlayerPort,
        clipboard: ClipboardPort,
        notifier: NotifierPort,
    ) -> None:
        self._sound = sound_player
        self._clipboard = clipboard
        self._notifier = notifier

    def handle(self, exc: AppException) -> None:
        """Report *exc* to the user. Never raises."""
        log_exception(exc, scope=LogScope.ERROR_HANDLER)
        self._sound.play(SoundCue.ERROR)

        title = f"❌ {exc.title}"
        fallback_path = exc.fallback_path

        if fallback_path and os.path.isfile(fallback_path):
            if self._copy_fallback(fallback_path):
                self._notifier.notify(
                    title,
                    f"{exc.message}\nImage copied to clipboard as fallback",
                    icon="edit-copy",
                )
            else:
                self._notifier.notify(
                    title,
                    f"{exc.message}\nCould not copy to clipboard",
                    icon="dialog-error",
                )
            return

        self._notifier.notify(title, exc.message, icon="dialog-error")

    def _copy_fallback(self, path: str) -> bool:
        mime_type, _ = mimetypes.guess_type(path)
        try:
            with open(path, "rb") as f:
                data = f.read()
            self._clipboard.copy_bytes(data, mime_type)
        except (OSError, ExternalServiceError) as exc:
            logger.warning("fallback_copy_failed", path=path, error=str(exc))
            return False
        logger.info("fallback_copied_to_clipboard", path=path, mime_type=mime_type)
        return True
