"""
Upload service — the single publish path shared by every pipeline.

Flow:  name → size check → (confirm) → transport → history → notify → clipboard.

Depends only on ports (protocol interfaces) — never on concrete adapters.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Optional

from domain.models import HistoryEntry, ResolvedArtifact, UploadResult
from ports.clipboard import ClipboardPort
from ports.desktop import ConfirmationPort, NotifierPort
from ports.history_log import HistoryLogPort
from ports.object_store import ObjectStorePort
from services.extension_classifier import classify_extension
from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import ExternalServiceError, NotFoundError, UploadCancelledError
from shared_utils.file_utils import format_file_size, generate_random_name
from shared_utils.logging_utils import get_scoped_logger, log_execution

logger = get_scoped_logger(LogScope.UPLOAD)


class UploadService:
    """Publishes a resolved artifact under a random name.

    The confirmation port is optional: when no dialog tool is available,
    large uploads proceed with a warning instead of being blocked.
    """

    def __init__(
        self,
        object_store: ObjectStorePort,
        clipboard: ClipboardPort,
        notifier: NotifierPort,
        history: HistoryLogPort,
        url_base: str,
        filename_length: int = Defaults.FILENAME_LENGTH,
        confirmation: Optional[ConfirmationPort] = None,
        large_file_threshold: int = Defaults.LARGE_FILE_THRESHOLD,
    ) -> None:
        self._store = object_store
        self._clipboard = clipboard
        self._notifier = notifier
        self._history = history
        self._url_base = url_base.rstrip("/")
        self._filename_length = filename_length
        self._confirmation = confirmation
        self._large_file_threshold = large_file_threshold

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @log_execution(scope=LogScope.UPLOAD)
    def upload(self, artifact: ResolvedArtifact) -> UploadResult:
        """Publish *artifact* and put its public URL on the clipboard.

        Raises:
            NotFoundError: If the file is missing or unreadable.
            UploadCancelledError: If the user declined a large upload.
            UploadFailedError: If the object store rejected the upload.
        """
        path = artifact.local_path
        if not (os.path.isfile(path) and os.access(path, os.R_OK)):
            raise NotFoundError("File not found or not readable", path=path)

        extension = artifact.extension or classify_extension(artifact.original_name)
        key = generate_random_name(self._filename_length, extension)

        size_bytes = os.path.getsize(path)
        formatted_size = format_file_size(size_bytes)

        self._confirm_size(artifact, size_bytes, formatted_size)

        logger.info(
            "upload_attempt",
            local_path=path,
            key=key,
            size=formatted_size,
        )
        self._store.upload_file(path, key)

        public_url = f"{self._url_base}/{key}"
        self._history.append(
            HistoryEntry(
                timestamp=datetime.now(),
                public_url=public_url,
                formatted_size=formatted_size,
            )
        )
        self._notifier.notify("✅ Upload Complete", f"{public_url}\n{formatted_size}", icon="image-x-generic")
        try:
            self._clipboard.copy_text(public_url)
        except ExternalServiceError as exc:
            logger.warning("clipboard_copy_failed", public_url=public_url, error=str(exc))

        logger.info("upload_published", public_url=public_url, size=formatted_size)
        return UploadResult(
            public_url=public_url,
            size_bytes=size_bytes,
            formatted_size=formatted_size,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _confirm_size(self, artifact: ResolvedArtifact, size_bytes: int, formatted_size: str) -> None:
        if size_bytes <= self._large_file_threshold:
            return

        if self._confirmation is None:
            logger.warning(
                "large_file_unconfirmed",
                size=formatted_size,
                reason="no confirmation dialog available, continuing with upload",
            )
            return

        if not self._confirmation.confirm_large_upload(artifact.original_name, formatted_size):
            logger.info("upload_cancelled_by_user", size=formatted_size)
            raise UploadCancelledError(context={"size": formatted_size})
