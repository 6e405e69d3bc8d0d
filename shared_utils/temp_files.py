"""
Scoped ownership of temporary artifacts.

Every file a pipeline creates (downloads, clipboard dumps, screenshots) is
registered with a :class:`TempArtifactGuard`; leaving the ``with`` block
removes all of them, whether the pipeline succeeded or raised.
"""

from __future__ import annotations

import os
from typing import List

from shared_utils.constants import LogScope
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.PIPELINE)


class TempArtifactGuard:
    """Context manager that deletes tracked paths on exit."""

    def __init__(self) -> None:
        self._paths: List[str] = []

    def __enter__(self) -> "TempArtifactGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    @property
    def paths(self) -> List[str]:
        return list(self._paths)

    def track(self, path: str) -> str:
        """Register *path* for removal and return it unchanged."""
        if path not in self._paths:
            self._paths.append(path)
        return path

    def cleanup(self) -> None:
        """Remove every tracked file. Safe to call more than once."""
        while self._paths:
            path = self._paths.pop()
            try:
                os.remove(path)
                logger.debug("temp_artifact_removed", path=path)
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.warning("temp_artifact_remove_failed", path=path, error=str(exc))
