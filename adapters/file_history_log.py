"""
Local text-file adapter for HistoryLogPort.

One line per published URL, appended to a per-user log file. Nothing ever
reads it back; it is an audit trail for the user.
"""

from __future__ import annotations

import os

from domain.models import HistoryEntry
from ports.history_log import HistoryLogPort  # noqa: F401 (runtime_checkable)
from shared_utils.constants import Defaults, LogScope
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


class FileHistoryLogAdapter:
    """Append-only history file."""

    def __init__(self, path: str = Defaults.HISTORY_LOG_PATH) -> None:
        self._path = os.path.expanduser(path)

    @property
    def path(self) -> str:
        return self._path

    def append(self, entry: HistoryEntry) -> None:
        """Append one entry; failures are logged and do not abort the upload."""
        try:
            os.makedirs(os.path.dirname(self._path) or ".", exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(entry.to_line() + "\n")
        except OSError as exc:
            logger.warning("history_append_failed", path=self._path, error=str(exc))
            return
        logger.debug("history_appended", path=self._path, url=entry.public_url)
