"""
Root conftest.py — shared fixtures for the entire test suite.

Guidelines:
    • No __init__.py in test sub-directories (avoids shadowing root packages).
    • pytest.ini_options lives in pyproject.toml with pythonpath=["."].
    • Every external collaborator is a MagicMock; no subprocess, network or S3.
"""

from typing import Dict
from unittest.mock import MagicMock

import pytest

from domain.models import ResolvedArtifact


# ---------------------------------------------------------------------------
# Marker registration
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")


# ---------------------------------------------------------------------------
# Minimal required settings kwargs for Settings(**BASE_SETTINGS_KWARGS)
# ---------------------------------------------------------------------------

BASE_SETTINGS_KWARGS: Dict[str, str] = {
    "minio_endpoint": "https://minio.example.com",
    "minio_access_key": "access",
    "minio_secret_key": "secret",
    "bucket_name": "cdn",
    "url_base": "https://cdn.example.com",
}

SETTINGS_ENV_VARS = (
    "MINIO_ENDPOINT",
    "MINIO_ACCESS_KEY",
    "MINIO_SECRET_KEY",
    "MINIO_REGION",
    "BUCKET_NAME",
    "URL_BASE",
    "SOUND_VOLUME",
    "FILENAME_LENGTH",
    "HISTORY_LOG_PATH",
    "SOUND_CACHE_DIR",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture()
def base_settings_kwargs() -> Dict[str, str]:
    """Provide the minimal kwargs needed to instantiate ``Settings``."""
    return {**BASE_SETTINGS_KWARGS}


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch, tmp_path):
    """Keep the developer's environment and .env file out of every test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

@pytest.fixture()
def sample_png(tmp_path) -> str:
    """A small file with a .png name."""
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\0" * 100)
    return str(path)


@pytest.fixture()
def sample_artifact(sample_png) -> ResolvedArtifact:
    return ResolvedArtifact(local_path=sample_png, original_name="photo.png", extension="png")


# ---------------------------------------------------------------------------
# Mock port factories
# ---------------------------------------------------------------------------

@pytest.fixture()
def mock_object_store() -> MagicMock:
    """Pre-configured object store mock."""
    mock = MagicMock()
    mock.upload_file.side_effect = lambda path, key: f"s3://cdn/{key}"
    return mock


@pytest.fixture()
def mock_clipboard() -> MagicMock:
    """Clipboard mock offering plain text by default."""
    mock = MagicMock()
    mock.list_types.return_value = ["text/plain;charset=utf-8"]
    mock.read_text.return_value = ""
    return mock


@pytest.fixture()
def mock_notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def mock_history() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def mock_sound_player() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def mock_stripper() -> MagicMock:
    mock = MagicMock()
    mock.strip.return_value = True
    return mock
