"""Port interface for the upload history."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from domain.models import HistoryEntry


@runtime_checkable
class HistoryLogPort(Protocol):
    """Append-only record of published URLs."""

    def append(self, entry: HistoryEntry) -> None:
        """Persist one history entry."""
        ...
