"""
Content fetcher — downloads a remote URL into a temporary file.

Flow:  share-page extraction → extension derivation → streamed download → EXIF strip.

Share pages (Tenor) are HTML wrappers around a direct media URL, which is
extracted before downloading. Discord's CDN serves attachments without a
file extension, so the extension is taken from a HEAD request's
Content-Type instead.
"""

from __future__ import annotations

import os
import posixpath
import re
from typing import Optional
from urllib.parse import urlsplit

import requests

from domain.models import ResolvedArtifact
from ports.metadata_stripper import MetadataStripperPort
from services.extension_classifier import classify_extension
from shared_utils.constants import (
    CONTENT_TYPE_EXTENSIONS,
    Defaults,
    LogScope,
    RemoteHosts,
)
from shared_utils.error_handler import DownloadFailedError
from shared_utils.file_utils import random_temp_path
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.FETCHER)

_MEDIA_URL_RE = re.compile(RemoteHosts.SHARE_PAGE_MEDIA_PATTERN)


# ---------------------------------------------------------------------------
# URL helpers (pure functions)
# ---------------------------------------------------------------------------

def url_filename(url: str) -> str:
    """Base filename of *url* with any query string removed."""
    return posixpath.basename(urlsplit(url.split("?", 1)[0]).path)


def extract_media_url(page_html: str) -> Optional[str]:
    """First direct .gif/.mp4 media URL embedded in a share page."""
    match = _MEDIA_URL_RE.search(page_html)
    return match.group(0) if match else None


def extension_for_content_type(content_type: str, filename: str) -> str:
    """Map a response Content-Type to an extension.

    Unknown types fall back to the filename's trailing segment when it has
    one, otherwise ``bin``.
    """
    mime = content_type.split(";", 1)[0].strip().lower()
    if mime in CONTENT_TYPE_EXTENSIONS:
        return CONTENT_TYPE_EXTENSIONS[mime]
    if "." in filename:
        return filename.rsplit(".", 1)[1]
    return "bin"


# ---------------------------------------------------------------------------
# ContentFetcher
# ---------------------------------------------------------------------------

class ContentFetcher:
    """Downloads URLs into randomly named temp files."""

    def __init__(
        self,
        filename_length: int = Defaults.FILENAME_LENGTH,
        metadata_stripper: Optional[MetadataStripperPort] = None,
        session: Optional[requests.Session] = None,
        timeout: float = Defaults.REQUEST_TIMEOUT,
        temp_dir: Optional[str] = None,
    ) -> None:
        self._filename_length = filename_length
        self._stripper = metadata_stripper
        self._session = session or requests.Session()
        self._timeout = timeout
        self._temp_dir = temp_dir

    def fetch(self, url: str) -> ResolvedArtifact:
        """Download *url* and return it as a temporary artifact.

        Raises:
            DownloadFailedError: On any transport failure or when a share
                page does not embed a media URL.
        """
        filename = url_filename(url)

        if RemoteHosts.SHARE_PAGE in url:
            logger.info("processing_share_page", url=url)
            url = self._resolve_share_page(url)
            filename = url_filename(url)
            logger.info("share_page_media_found", media_url=url)

        extension = classify_extension(filename)
        if not extension and RemoteHosts.EXTENSIONLESS_CDN in url:
            extension = self._sniff_extension(url, filename)

        tmp_path = random_temp_path(self._filename_length, extension, self._temp_dir)
        logger.info("download_started", url=url, tmp_path=tmp_path)
        size = self._download(url, tmp_path)
        logger.info("download_completed", url=url, tmp_path=tmp_path, size_bytes=size)

        if self._stripper is not None:
            self._stripper.strip(tmp_path)

        return ResolvedArtifact(
            local_path=tmp_path,
            original_name=filename or os.path.basename(tmp_path),
            extension=extension,
            temporary=True,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve_share_page(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("share_page_fetch_failed", url=url, error=str(exc))
            raise DownloadFailedError(
                "Could not load share page", url=url, context={"error": str(exc)}
            ) from exc

        media_url = extract_media_url(response.text)
        if media_url is None:
            logger.error("share_page_media_missing", url=url)
            raise DownloadFailedError("Could not extract media URL from share page", url=url)
        return media_url

    def _sniff_extension(self, url: str, filename: str) -> str:
        try:
            response = self._session.head(url, allow_redirects=True, timeout=self._timeout)
            content_type = response.headers.get("Content-Type", "")
        except requests.RequestException as exc:
            logger.warning("content_type_lookup_failed", url=url, error=str(exc))
            content_type = ""
        extension = extension_for_content_type(content_type, filename)
        logger.debug("content_type_sniffed", url=url, content_type=content_type, extension=extension)
        return extension

    def _download(self, url: str, tmp_path: str) -> int:
        size = 0
        try:
            with self._session.get(url, stream=True, allow_redirects=True, timeout=self._timeout) as response:
                response.raise_for_status()
                with open(tmp_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=Defaults.DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            size += len(chunk)
        except (requests.RequestException, OSError) as exc:
            logger.error("download_failed", url=url, error=str(exc))
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise DownloadFailedError(
                "Failed to download from URL", url=url, context={"error": str(exc)}
            ) from exc
        return size
