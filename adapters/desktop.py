"""
Desktop collaborator adapters.

Thin wrappers around ``notify-send``, ``pw-cat``, ``spectacle`` and ``zenity``.
Notifications and sounds are best-effort: failures are logged, never raised.
"""

from __future__ import annotations

import html
import os
import subprocess
from typing import Dict, Optional

import requests

from domain.models import SoundCue
from ports.desktop import (  # noqa: F401 (runtime_checkable)
    ConfirmationPort,
    NotifierPort,
    ScreenshotPort,
    SoundPlayerPort,
)
from shared_utils.constants import APP_NAME, Defaults, ExternalTools, LogScope, SoundUrls
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


# ======================================================================
# Notifications
# ======================================================================

class NotifySendNotifier:
    """libnotify notifications via ``notify-send``."""

    def __init__(self, executable: str = ExternalTools.NOTIFY_SEND, timeout: float = Defaults.REQUEST_TIMEOUT) -> None:
        self._exe = executable
        self._timeout = timeout

    def notify(self, title: str, message: str, icon: str = "image-x-generic") -> None:
        cmd = [
            self._exe,
            f"--icon={icon}",
            "--urgency=normal",
            f"--app-name={APP_NAME}",
            title,
            message,
        ]
        try:
            subprocess.run(cmd, capture_output=True, timeout=self._timeout, check=True)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("notification_failed", title=title, error=str(exc))
            return
        logger.debug("notification_sent", title=title)


# ======================================================================
# Sound cues
# ======================================================================

_CUE_FILES: Dict[SoundCue, tuple] = {
    SoundCue.CAPTURE: ("CaptureSound.wav", SoundUrls.CAPTURE),
    SoundCue.COMPLETE: ("TaskCompletedSound.wav", SoundUrls.COMPLETE),
    SoundCue.ERROR: ("ErrorSound.wav", SoundUrls.ERROR),
}


class PipeWireSoundPlayer:
    """Plays cached WAV cues with ``pw-cat`` without waiting for playback.

    Cue files are downloaded into *cache_dir* on first use and re-fetched when
    missing or truncated.
    """

    def __init__(
        self,
        cache_dir: str,
        volume: float = Defaults.SOUND_VOLUME,
        executable: str = ExternalTools.PW_CAT,
        session: Optional[requests.Session] = None,
        timeout: float = Defaults.REQUEST_TIMEOUT,
    ) -> None:
        self._cache_dir = cache_dir
        self._volume = volume
        self._exe = executable
        self._session = session or requests.Session()
        self._timeout = timeout

    def play(self, cue: SoundCue) -> None:
        path = self.ensure_cue(cue)
        if path is None:
            return
        try:
            subprocess.Popen(
                [self._exe, "-p", "--volume", str(self._volume), path],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            logger.warning("sound_playback_failed", cue=cue.value, error=str(exc))

    def ensure_cue(self, cue: SoundCue) -> Optional[str]:
        """Local path of the cue's WAV file, downloading it when needed."""
        filename, url = _CUE_FILES[cue]
        path = os.path.join(self._cache_dir, filename)
        if os.path.isfile(path) and os.path.getsize(path) >= Defaults.MIN_SOUND_FILE_SIZE:
            return path

        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            os.makedirs(self._cache_dir, exist_ok=True)
            with open(path, "wb") as f:
                f.write(response.content)
        except (requests.RequestException, OSError) as exc:
            logger.warning("sound_download_failed", cue=cue.value, url=url, error=str(exc))
            return None

        logger.debug("sound_downloaded", cue=cue.value, path=path)
        return path


# ======================================================================
# Screenshot capture
# ======================================================================

class SpectacleScreenshotTool:
    """KDE Spectacle region capture, bounded by a fixed timeout."""

    def __init__(self, executable: str = ExternalTools.SPECTACLE, timeout: float = Defaults.SCREENSHOT_TIMEOUT) -> None:
        self._exe = executable
        self._timeout = timeout

    def capture(self, output_path: str) -> bool:
        cmd = [self._exe, "--background", "--region", "--nonotify", "--output", output_path]
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            logger.info("screenshot_timed_out", timeout=self._timeout)
            return False
        except OSError as exc:
            logger.warning("screenshot_tool_failed", error=str(exc))
            return False

        if result.returncode != 0 or not os.path.isfile(output_path):
            logger.info("screenshot_cancelled", returncode=result.returncode)
            return False
        return True


# ======================================================================
# Large-file confirmation
# ======================================================================

class ZenityConfirmation:
    """Question dialog shown before uploading a large file."""

    def __init__(self, executable: str = ExternalTools.ZENITY, timeout: float = Defaults.DIALOG_TIMEOUT) -> None:
        self._exe = executable
        self._timeout = timeout

    def confirm_large_upload(self, file_name: str, formatted_size: str) -> bool:
        text = (
            f"<span size='large'>{html.escape(file_name)}</span>\n\n"
            f"Size: <b>{html.escape(formatted_size)}</b>\n\n"
            "Do you want to continue with the upload?"
        )
        cmd = [
            self._exe,
            "--question",
            "--title=Large File Upload",
            "--window-icon=system-file-manager",
            "--icon-name=system-file-manager",
            f"--text={text}",
            "--width=450",
            "--height=250",
            "--ok-label=Upload",
            "--cancel-label=Cancel",
            "--no-wrap",
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            logger.info("confirmation_timed_out", file_name=file_name)
            return False
        except OSError as exc:
            logger.warning("confirmation_dialog_failed", error=str(exc))
            return False

        confirmed = result.returncode == 0
        logger.info("large_upload_confirmation", file_name=file_name, confirmed=confirmed)
        return confirmed
