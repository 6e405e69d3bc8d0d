"""
ExifTool adapter.

Implements MetadataStripperPort. Only files for which a fast metadata check
prints something are rewritten; every failure degrades to a warning.
"""

from __future__ import annotations

import subprocess

from ports.metadata_stripper import MetadataStripperPort  # noqa: F401 (runtime_checkable)
from shared_utils.constants import Defaults, ExternalTools, LogScope
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


class ExifToolMetadataStripper:
    """Strip all metadata in place with ``exiftool -all=``."""

    def __init__(self, executable: str = ExternalTools.EXIFTOOL, timeout: float = Defaults.REQUEST_TIMEOUT) -> None:
        self._exe = executable
        self._timeout = timeout

    def strip(self, path: str) -> bool:
        try:
            if not self._has_metadata(path):
                return False

            logger.info("removing_exif_data", path=path)
            result = subprocess.run(
                [self._exe, "-all=", "-overwrite_original", "-q", path],
                capture_output=True,
                timeout=self._timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.warning("exif_strip_failed", path=path, error=str(exc))
            return False

        if result.returncode != 0:
            logger.warning(
                "exif_strip_failed",
                path=path,
                returncode=result.returncode,
                stderr=result.stderr.decode(errors="replace").strip(),
            )
            return False
        return True

    def _has_metadata(self, path: str) -> bool:
        check = subprocess.run(
            [self._exe, "-q", "-fast2", path],
            capture_output=True,
            timeout=self._timeout,
        )
        return bool(check.stdout.strip())
