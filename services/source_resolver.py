"""
Source resolver — turns a user-supplied source string into a local file.

Classification happens once, in :func:`classify_source`; everything
downstream branches on the resulting :class:`UploadSource` kind.
"""

from __future__ import annotations

import os
import re
from typing import Optional

from domain.models import (
    PathCheck,
    PathStatus,
    ResolvedArtifact,
    SourceKind,
    UploadSource,
)
from ports.content_fetcher import ContentFetcherPort
from ports.metadata_stripper import MetadataStripperPort
from services.extension_classifier import classify_extension
from shared_utils.constants import LogScope
from shared_utils.error_handler import NotFoundError
from shared_utils.file_utils import decode_file_url
from shared_utils.logging_utils import get_scoped_logger
from shared_utils.temp_files import TempArtifactGuard
from shared_utils.validation import InputValidator

logger = get_scoped_logger(LogScope.RESOLVER)

_HTTP_URL_RE = re.compile(r"https?://\S+")


# ---------------------------------------------------------------------------
# Classification helpers (pure functions apart from filesystem lookups)
# ---------------------------------------------------------------------------

def is_http_url(text: str) -> bool:
    """True for http(s) URLs without embedded whitespace."""
    return _HTTP_URL_RE.fullmatch(text) is not None


def classify_source(text: str) -> UploadSource:
    """Classify *text* as a file:// URL, a remote URL or a local path."""
    if text.startswith("file://"):
        return UploadSource(kind=SourceKind.FILE_URL, value=decode_file_url(text))
    if is_http_url(text):
        return UploadSource(kind=SourceKind.REMOTE_URL, value=text)
    return UploadSource(kind=SourceKind.LOCAL_PATH, value=text)


def check_local_path(candidate: str) -> PathCheck:
    """Decide whether *candidate* addresses a local file.

    A bare name must exist as a file relative to the working directory; a
    name containing a separator only needs its parent directory to exist.
    """
    if not InputValidator.is_safe_path(candidate):
        return PathCheck(status=PathStatus.NOT_APPLICABLE)

    if os.sep not in candidate and "/" not in candidate:
        if os.path.isfile(candidate):
            return PathCheck(status=PathStatus.FOUND, path=candidate)
        return PathCheck(status=PathStatus.NOT_FOUND, path=candidate)

    parent = os.path.dirname(candidate) or os.sep
    if os.path.isdir(parent):
        return PathCheck(status=PathStatus.FOUND, path=candidate)
    return PathCheck(status=PathStatus.NOT_FOUND, path=candidate)


# ---------------------------------------------------------------------------
# SourceResolver
# ---------------------------------------------------------------------------

class SourceResolver:
    """Resolves local paths, file:// URLs and remote URLs to local artifacts."""

    def __init__(
        self,
        fetcher: ContentFetcherPort,
        metadata_stripper: Optional[MetadataStripperPort] = None,
    ) -> None:
        self._fetcher = fetcher
        self._stripper = metadata_stripper

    def resolve(self, text: str, guard: TempArtifactGuard) -> ResolvedArtifact:
        """Resolve *text* into a local file.

        Downloads are registered with *guard* so they are removed when the
        pipeline ends.

        Raises:
            NotFoundError: If a local path or file:// target does not exist.
            DownloadFailedError: If a remote URL cannot be fetched.
        """
        source = classify_source(text)
        logger.info("source_classified", kind=source.kind.value, value=source.value)

        if source.kind is SourceKind.REMOTE_URL:
            artifact = self._fetcher.fetch(source.value)
            guard.track(artifact.local_path)
            return artifact

        if source.kind is SourceKind.FILE_URL:
            if not os.path.isfile(source.value):
                raise NotFoundError(f"File not found: {source.value}", path=source.value)
            return self._local_artifact(source.value)

        if source.kind is SourceKind.LOCAL_PATH:
            check = check_local_path(source.value)
            if check.status is PathStatus.NOT_APPLICABLE:
                raise NotFoundError("Invalid file path format", path=source.value)
            if check.status is PathStatus.NOT_FOUND:
                raise NotFoundError(f"File not found: {source.value}", path=source.value)
            return self._local_artifact(source.value)

        raise ValueError(f"Unhandled source kind: {source.kind}")

    def _local_artifact(self, path: str) -> ResolvedArtifact:
        if self._stripper is not None and os.path.isfile(path):
            self._stripper.strip(path)
        name = os.path.basename(path)
        return ResolvedArtifact(
            local_path=path,
            original_name=name,
            extension=classify_extension(name),
            temporary=False,
        )
