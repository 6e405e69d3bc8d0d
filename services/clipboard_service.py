"""
Clipboard service — decides what clipboard content should be uploaded.

Images win over text. Text is tried, in order, as an http(s) URL, a file://
URL pointing at an existing file, and a local path; anything else is
uploaded verbatim as a text file.
"""

from __future__ import annotations

import os
from typing import Optional

from domain.models import ClipboardAction, ClipboardDecision, PathStatus
from ports.clipboard import ClipboardPort
from ports.metadata_stripper import MetadataStripperPort
from services.source_resolver import check_local_path, is_http_url
from shared_utils.constants import CONTENT_TYPE_EXTENSIONS, Defaults, LogScope
from shared_utils.error_handler import EmptyClipboardError, UploadFailedError
from shared_utils.file_utils import decode_file_url, random_temp_path
from shared_utils.logging_utils import get_scoped_logger
from shared_utils.temp_files import TempArtifactGuard

logger = get_scoped_logger(LogScope.CLIPBOARD)

_TEXT_EXTENSION = "txt"


def image_extension(mime_type: str) -> str:
    """Extension for a clipboard image MIME type (``image/png`` → ``png``)."""
    if mime_type in CONTENT_TYPE_EXTENSIONS:
        return CONTENT_TYPE_EXTENSIONS[mime_type]
    subtype = mime_type.split("/", 1)[-1].split(";", 1)[0]
    return subtype if subtype.isalnum() else ""


class ClipboardService:
    """Classifies clipboard content and materializes it as an upload source."""

    def __init__(
        self,
        clipboard: ClipboardPort,
        filename_length: int = Defaults.FILENAME_LENGTH,
        metadata_stripper: Optional[MetadataStripperPort] = None,
        temp_dir: Optional[str] = None,
    ) -> None:
        self._clipboard = clipboard
        self._filename_length = filename_length
        self._stripper = metadata_stripper
        self._temp_dir = temp_dir

    def classify(self) -> ClipboardDecision:
        """Inspect the clipboard and decide how to upload it.

        Raises:
            EmptyClipboardError: If there is no image and the text is blank.
        """
        image_types = [t for t in self._clipboard.list_types() if t.startswith("image/")]
        if image_types:
            logger.info("clipboard_image_detected", mime_type=image_types[0])
            return ClipboardDecision(action=ClipboardAction.UPLOAD_AS_IMAGE, value=image_types[0])

        raw_text = self._clipboard.read_text()
        text = raw_text.strip()
        if not text:
            raise EmptyClipboardError()

        if is_http_url(text):
            decision = ClipboardDecision(action=ClipboardAction.UPLOAD_URL, value=text)
        elif text.startswith("file://") and os.path.isfile(decode_file_url(text)):
            decision = ClipboardDecision(action=ClipboardAction.UPLOAD_AS_LOCAL_PATH, value=text)
        elif check_local_path(text).status is PathStatus.FOUND:
            decision = ClipboardDecision(action=ClipboardAction.UPLOAD_AS_LOCAL_PATH, value=text)
        else:
            decision = ClipboardDecision(action=ClipboardAction.UPLOAD_AS_TEXT, value=raw_text)

        logger.info("clipboard_classified", action=decision.action.value)
        return decision

    def materialize(self, decision: ClipboardDecision, guard: TempArtifactGuard) -> str:
        """Return an upload source string for *decision*.

        Images and text are written to temp files registered with *guard*;
        URLs and paths are passed through unchanged.
        """
        if decision.action is ClipboardAction.UPLOAD_AS_IMAGE:
            data = self._clipboard.read_bytes(decision.value)
            path = self._write_temp(data, image_extension(decision.value), guard)
            logger.info("clipboard_image_saved", path=path, size_bytes=len(data))
            if self._stripper is not None:
                self._stripper.strip(path)
            return path

        if decision.action is ClipboardAction.UPLOAD_AS_TEXT:
            path = self._write_temp(decision.value.encode("utf-8"), _TEXT_EXTENSION, guard)
            logger.info("clipboard_text_saved", path=path)
            return path

        if decision.action in (ClipboardAction.UPLOAD_URL, ClipboardAction.UPLOAD_AS_LOCAL_PATH):
            return decision.value

        raise ValueError(f"Unhandled clipboard action: {decision.action}")

    def _write_temp(self, data: bytes, extension: str, guard: TempArtifactGuard) -> str:
        path = guard.track(random_temp_path(self._filename_length, extension, self._temp_dir))
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as exc:
            logger.error("clipboard_temp_write_failed", path=path, error=str(exc))
            raise UploadFailedError(
                "Could not save clipboard content to a temporary file",
                context={"path": path, "error": str(exc)},
            ) from exc
        return path
