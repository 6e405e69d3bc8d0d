"""
Pure domain models for the CDN uploader.

These models contain NO subprocess or boto3 dependencies. They represent the
values that flow between the resolver, the clipboard classifier and the
upload service.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


# ---------------------------------------------------------------------------
# Upload sources
# ---------------------------------------------------------------------------


class SourceKind(str, Enum):
    """What a user-supplied source string refers to."""

    LOCAL_PATH = "LOCAL_PATH"
    REMOTE_URL = "REMOTE_URL"
    FILE_URL = "FILE_URL"


class UploadSource(BaseModel):
    """Classified upload source.

    ``value`` is the filesystem path for LOCAL_PATH, the URL for REMOTE_URL
    and the already-decoded path for FILE_URL.
    """

    model_config = ConfigDict(frozen=True)

    kind: SourceKind
    value: str


class PathStatus(str, Enum):
    """Outcome of checking a candidate local path."""

    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class PathCheck(BaseModel):
    """Result of :func:`services.source_resolver.check_local_path`.

    FOUND means the path is addressable: an existing file for a bare name, or
    a path whose parent directory exists. NOT_APPLICABLE means the string
    does not look like a path at all (empty or contains unsafe characters).
    """

    model_config = ConfigDict(frozen=True)

    status: PathStatus
    path: Optional[str] = None


# ---------------------------------------------------------------------------
# Artifacts and results
# ---------------------------------------------------------------------------


class ResolvedArtifact(BaseModel):
    """A local file ready to be handed to the upload service."""

    local_path: str
    original_name: str
    extension: Optional[str] = None
    temporary: bool = False


class UploadResult(BaseModel):
    """Outcome of a successful publish."""

    public_url: str
    size_bytes: int
    formatted_size: str


class HistoryEntry(BaseModel):
    """One line of the append-only upload history."""

    timestamp: datetime
    public_url: str
    formatted_size: str

    def to_line(self) -> str:
        return (
            f"{self.timestamp.strftime('%Y-%m-%d %H:%M:%S')} - "
            f"Size: {self.formatted_size} - URL: {self.public_url}"
        )


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------


class ClipboardAction(str, Enum):
    """How clipboard content should be uploaded."""

    UPLOAD_AS_IMAGE = "UPLOAD_AS_IMAGE"
    UPLOAD_URL = "UPLOAD_URL"
    UPLOAD_AS_LOCAL_PATH = "UPLOAD_AS_LOCAL_PATH"
    UPLOAD_AS_TEXT = "UPLOAD_AS_TEXT"


class ClipboardDecision(BaseModel):
    """Classification of the current clipboard content.

    ``value`` holds the image MIME type, the URL, the local path (or the
    file:// URL pointing at it) or the raw text, depending on ``action``.
    """

    model_config = ConfigDict(frozen=True)

    action: ClipboardAction
    value: str


# ---------------------------------------------------------------------------
# Sound cues
# ---------------------------------------------------------------------------


class SoundCue(str, Enum):
    """Audible feedback played at pipeline milestones."""

    CAPTURE = "CAPTURE"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"
