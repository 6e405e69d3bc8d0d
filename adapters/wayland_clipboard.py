"""
Wayland clipboard adapter.

Implements ClipboardPort by shelling out to ``wl-paste`` and ``wl-copy``
from wl-clipboard.
"""

from __future__ import annotations

import subprocess
from typing import List, Optional

from ports.clipboard import ClipboardPort  # noqa: F401 (runtime_checkable)
from shared_utils.constants import Defaults, ExternalTools, LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


class WaylandClipboardAdapter:
    """wl-clipboard implementation of ClipboardPort."""

    def __init__(
        self,
        paste_cmd: str = ExternalTools.WL_PASTE,
        copy_cmd: str = ExternalTools.WL_COPY,
        timeout: float = Defaults.REQUEST_TIMEOUT,
    ) -> None:
        self._paste = paste_cmd
        self._copy = copy_cmd
        self._timeout = timeout

    # ------------------------------------------------------------------
    # ClipboardPort implementation
    # ------------------------------------------------------------------

    def list_types(self) -> List[str]:
        """MIME types on offer; empty when the clipboard is empty."""
        result = self._run([self._paste, "--list-types"], check=False)
        if result.returncode != 0:
            return []
        return [line.strip() for line in result.stdout.decode(errors="replace").splitlines() if line.strip()]

    def read_text(self) -> str:
        """Clipboard text without the trailing newline; NUL bytes removed."""
        result = self._run([self._paste, "--no-newline"], check=False)
        if result.returncode != 0:
            # wl-paste exits non-zero with "Nothing is copied" on an empty clipboard
            return ""
        return result.stdout.decode(errors="replace").replace("\0", "")

    def read_bytes(self, mime_type: str) -> bytes:
        result = self._run([self._paste, "--type", mime_type])
        logger.debug("clipboard_read", mime_type=mime_type, size_bytes=len(result.stdout))
        return result.stdout

    def copy_text(self, text: str) -> None:
        self._run([self._copy], input_bytes=text.encode())
        logger.info("clipboard_text_copied", length=len(text))

    def copy_bytes(self, data: bytes, mime_type: Optional[str] = None) -> None:
        cmd = [self._copy]
        if mime_type:
            cmd += ["--type", mime_type]
        self._run(cmd, input_bytes=data)
        logger.info("clipboard_bytes_copied", mime_type=mime_type, size_bytes=len(data))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(
        self,
        cmd: List[str],
        input_bytes: Optional[bytes] = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        try:
            result = subprocess.run(
                cmd,
                input=input_bytes,
                capture_output=True,
                timeout=self._timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.error("clipboard_command_failed", cmd=cmd[0], error=str(exc))
            raise ExternalServiceError("Clipboard", str(exc), context={"cmd": cmd[0]}) from exc

        if check and result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            logger.error("clipboard_command_failed", cmd=cmd[0], returncode=result.returncode, stderr=stderr)
            raise ExternalServiceError(
                "Clipboard",
                stderr or f"{cmd[0]} exited with {result.returncode}",
                context={"cmd": cmd[0]},
            )
        return result
