"""
Unit tests for services.source_resolver.

The content fetcher and metadata stripper are mocked; local paths use tmp_path.
"""

import os
from unittest.mock import MagicMock

import pytest

from domain.models import PathStatus, ResolvedArtifact, SourceKind
from services.source_resolver import (
    SourceResolver,
    check_local_path,
    classify_source,
    is_http_url,
)
from shared_utils.error_handler import DownloadFailedError, NotFoundError
from shared_utils.temp_files import TempArtifactGuard


# ---------------------------------------------------------------------------
# classify_source
# ---------------------------------------------------------------------------


class TestClassifySource:
    def test_https_url(self) -> None:
        source = classify_source("https://example.com/image.png")
        assert source.kind is SourceKind.REMOTE_URL
        assert source.value == "https://example.com/image.png"

    def test_http_url(self) -> None:
        assert classify_source("http://example.com/a").kind is SourceKind.REMOTE_URL

    def test_url_with_whitespace_is_not_remote(self) -> None:
        assert classify_source("https://example.com/a b").kind is SourceKind.LOCAL_PATH

    def test_file_url_decoded(self) -> None:
        source = classify_source("file:///tmp/x%20y.png")
        assert source.kind is SourceKind.FILE_URL
        assert source.value == "/tmp/x y.png"

    def test_plain_path(self) -> None:
        source = classify_source("images/photo.png")
        assert source.kind is SourceKind.LOCAL_PATH
        assert source.value == "images/photo.png"


class TestIsHttpUrl:
    @pytest.mark.parametrize("text", ["https://a.b", "http://x.y/z?q=1"])
    def test_valid(self, text: str) -> None:
        assert is_http_url(text)

    @pytest.mark.parametrize("text", ["ftp://a.b", "https://", "see https://a.b", "https://a.b\nmore"])
    def test_invalid(self, text: str) -> None:
        assert not is_http_url(text)


# ---------------------------------------------------------------------------
# check_local_path
# ---------------------------------------------------------------------------


class TestCheckLocalPath:
    def test_bare_name_existing(self, tmp_path) -> None:
        (tmp_path / "notes.txt").write_text("hi")
        check = check_local_path("notes.txt")  # cwd is tmp_path (conftest)
        assert check.status is PathStatus.FOUND
        assert check.path == "notes.txt"

    def test_bare_name_missing(self) -> None:
        assert check_local_path("missing.txt").status is PathStatus.NOT_FOUND

    def test_separator_with_existing_parent(self, tmp_path) -> None:
        check = check_local_path(str(tmp_path / "not-yet.png"))
        assert check.status is PathStatus.FOUND

    def test_separator_with_missing_parent(self, tmp_path) -> None:
        check = check_local_path(str(tmp_path / "nope" / "a.png"))
        assert check.status is PathStatus.NOT_FOUND

    @pytest.mark.parametrize("text", ["", "a<b", "a>b", "c:/x", 'say "hi"', "a|b", "a\\b", "what?", "*.png"])
    def test_unsafe_or_empty_not_applicable(self, text: str) -> None:
        assert check_local_path(text).status is PathStatus.NOT_APPLICABLE


# ---------------------------------------------------------------------------
# SourceResolver.resolve
# ---------------------------------------------------------------------------


class TestSourceResolver:
    @pytest.fixture()
    def fetcher(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture()
    def resolver(self, fetcher: MagicMock, mock_stripper: MagicMock) -> SourceResolver:
        return SourceResolver(fetcher=fetcher, metadata_stripper=mock_stripper)

    def test_file_url_with_space_resolves(self, resolver, tmp_path, mock_stripper) -> None:
        target = tmp_path / "x y.png"
        target.write_bytes(b"img")
        with TempArtifactGuard() as guard:
            artifact = resolver.resolve(f"file://{tmp_path}/x%20y.png", guard)
        assert artifact.local_path == str(target)
        assert artifact.original_name == "x y.png"
        assert artifact.extension == "png"
        assert artifact.temporary is False
        mock_stripper.strip.assert_called_once_with(str(target))

    def test_file_url_missing_raises_not_found(self, resolver, tmp_path) -> None:
        with TempArtifactGuard() as guard, pytest.raises(NotFoundError):
            resolver.resolve(f"file://{tmp_path}/absent%20file.png", guard)

    def test_remote_url_delegates_and_tracks(self, resolver, fetcher, tmp_path) -> None:
        downloaded = tmp_path / "AbCdEfGh.gif"
        downloaded.write_bytes(b"GIF89a")
        fetcher.fetch.return_value = ResolvedArtifact(
            local_path=str(downloaded), original_name="cat.gif", extension="gif", temporary=True
        )
        guard = TempArtifactGuard()
        artifact = resolver.resolve("https://example.com/cat.gif", guard)

        fetcher.fetch.assert_called_once_with("https://example.com/cat.gif")
        assert artifact.temporary is True
        assert guard.paths == [str(downloaded)]
        guard.cleanup()
        assert not downloaded.exists()

    def test_remote_failure_propagates(self, resolver, fetcher) -> None:
        fetcher.fetch.side_effect = DownloadFailedError("boom")
        with TempArtifactGuard() as guard, pytest.raises(DownloadFailedError):
            resolver.resolve("https://example.com/x.png", guard)

    def test_local_path_strips_metadata(self, resolver, sample_png, mock_stripper) -> None:
        with TempArtifactGuard() as guard:
            artifact = resolver.resolve(sample_png, guard)
        assert artifact.local_path == sample_png
        assert artifact.extension == "png"
        mock_stripper.strip.assert_called_once_with(sample_png)
        # local files are never scheduled for deletion
        assert os.path.exists(sample_png)

    def test_bare_name_missing_raises(self, resolver) -> None:
        with TempArtifactGuard() as guard, pytest.raises(NotFoundError, match="File not found"):
            resolver.resolve("ghost.png", guard)

    def test_unsafe_path_raises(self, resolver) -> None:
        with TempArtifactGuard() as guard, pytest.raises(NotFoundError, match="Invalid file path"):
            resolver.resolve("what?.png", guard)

    def test_missing_parent_raises(self, resolver, tmp_path) -> None:
        with TempArtifactGuard() as guard, pytest.raises(NotFoundError):
            resolver.resolve(str(tmp_path / "no" / "such.png"), guard)

    def test_without_stripper(self, fetcher, sample_png) -> None:
        resolver = SourceResolver(fetcher=fetcher, metadata_stripper=None)
        with TempArtifactGuard() as guard:
            artifact = resolver.resolve(sample_png, guard)
        assert artifact.local_path == sample_png

    def test_compound_extension_preserved(self, resolver, tmp_path) -> None:
        archive = tmp_path / "backup.tar.gz"
        archive.write_bytes(b"\x1f\x8b")
        with TempArtifactGuard() as guard:
            artifact = resolver.resolve(str(archive), guard)
        assert artifact.extension == "tar.gz"
