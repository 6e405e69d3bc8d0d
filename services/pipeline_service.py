"""
Pipeline service — the three entry pipelines of the tool.

    screenshot:  capture → upload
    upload:      source string → resolver → upload
    clipboard:   classify → materialize → resolver → upload

Each run owns a TempArtifactGuard, so every temp file it created is removed
on the way out. Upload-path failures are handed to the FailureHandler once
and turned into an exit code; they are never re-raised.
"""

from __future__ import annotations

from typing import Optional

from domain.models import SoundCue, UploadResult
from ports.desktop import ScreenshotPort, SoundPlayerPort
from services.clipboard_service import ClipboardService
from services.failure_handler import FailureHandler
from services.source_resolver import SourceResolver
from services.upload_service import UploadService
from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import AppException, UploadCancelledError
from shared_utils.file_utils import random_temp_path
from shared_utils.logging_utils import get_scoped_logger
from shared_utils.temp_files import TempArtifactGuard

logger = get_scoped_logger(LogScope.PIPELINE)

EXIT_OK = 0
EXIT_FAILURE = 1


class PipelineService:
    """Runs one pipeline end-to-end and reports an exit code."""

    def __init__(
        self,
        resolver: SourceResolver,
        uploader: UploadService,
        clipboard_service: ClipboardService,
        failure_handler: FailureHandler,
        sound_player: SoundPlayerPort,
        screenshot_tool: Optional[ScreenshotPort] = None,
        filename_length: int = Defaults.FILENAME_LENGTH,
    ) -> None:
        self._resolver = resolver
        self._uploader = uploader
        self._clipboard = clipboard_service
        self._failures = failure_handler
        self._sound = sound_player
        self._screenshot = screenshot_tool
        self._filename_length = filename_length
        self.last_result: Optional[UploadResult] = None

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    def run_screenshot(self) -> int:
        """Capture a region and upload it. Cancelling the capture exits cleanly."""
        if self._screenshot is None:
            raise RuntimeError("No screenshot tool configured")

        with TempArtifactGuard() as guard:
            path = guard.track(random_temp_path(self._filename_length, "png"))
            logger.info("capturing_screenshot", path=path)
            if not self._screenshot.capture(path):
                logger.info("screenshot_aborted")
                return EXIT_OK

            self._sound.play(SoundCue.CAPTURE)
            return self._guarded(lambda: self._upload_source(path, guard))

    def run_upload(self, source: str) -> int:
        """Upload a local path, file:// URL or remote URL."""
        logger.info("handling_file_upload", source=source)
        with TempArtifactGuard() as guard:
            return self._guarded(lambda: self._upload_source(source, guard))

    def run_clipboard(self) -> int:
        """Upload whatever the clipboard holds."""
        with TempArtifactGuard() as guard:
            def _pipeline() -> UploadResult:
                decision = self._clipboard.classify()
                source = self._clipboard.materialize(decision, guard)
                return self._upload_source(source, guard)

            return self._guarded(_pipeline)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _upload_source(self, source: str, guard: TempArtifactGuard) -> UploadResult:
        artifact = self._resolver.resolve(source, guard)
        return self._uploader.upload(artifact)

    def _guarded(self, pipeline) -> int:
        try:
            self.last_result = pipeline()
        except UploadCancelledError as exc:
            self._failures.handle(exc)
            return EXIT_OK
        except AppException as exc:
            self._failures.handle(exc)
            return EXIT_FAILURE

        self._sound.play(SoundCue.COMPLETE)
        return EXIT_OK
