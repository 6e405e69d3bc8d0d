"""
File naming and sizing helpers.

Pure functions (no external collaborators) shared by the fetcher, the
clipboard service and the upload service.
"""

from __future__ import annotations

import os
import secrets
import string
import tempfile
from typing import Optional

_NAME_ALPHABET = string.ascii_letters

_KB = 1024
_MB = 1024 * 1024
_GB = 1024 * 1024 * 1024


def generate_random_name(length: int, extension: str = "") -> str:
    """Random letters-only name of exactly *length* characters.

    When *extension* is non-empty it is appended verbatim after a single dot.
    """
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")
    name = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(length))
    return f"{name}.{extension}" if extension else name


def random_temp_path(length: int, extension: str = "", directory: Optional[str] = None) -> str:
    """Fresh path inside the temp directory; the file is not created."""
    return os.path.join(directory or tempfile.gettempdir(), generate_random_name(length, extension))


def format_file_size(size_bytes: int) -> str:
    """Human readable size: bytes below 1 KiB, otherwise KB/MB/GB with two decimals."""
    if size_bytes < _KB:
        return f"{size_bytes} bytes"
    if size_bytes < _MB:
        return f"{size_bytes / _KB:.2f} KB"
    if size_bytes < _GB:
        return f"{size_bytes / _MB:.2f} MB"
    return f"{size_bytes / _GB:.2f} GB"


def decode_file_url(url: str) -> str:
    """Strip the ``file://`` scheme and decode encoded spaces."""
    return url[len("file://"):].replace("%20", " ")
