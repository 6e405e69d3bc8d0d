"""
Constants management.
Centralized configuration for magic values, lookup tables, and defaults.
"""

from enum import Enum
from typing import Dict, Final, Tuple


# Default values
class Defaults:
    """Defaults for every tunable knob."""
    SOUND_VOLUME: Final[float] = 1.0
    FILENAME_LENGTH: Final[int] = 8
    MINIO_REGION: Final[str] = "us-east-1"
    HISTORY_LOG_PATH: Final[str] = "~/.cdn_urls.log"
    REQUEST_TIMEOUT: Final[float] = 30.0
    SCREENSHOT_TIMEOUT: Final[float] = 30.0
    DIALOG_TIMEOUT: Final[float] = 300.0
    LOG_LEVEL: Final[str] = "INFO"
    DOWNLOAD_CHUNK_SIZE: Final[int] = 64 * 1024
    LARGE_FILE_THRESHOLD: Final[int] = 64 * 1024 * 1024  # 64 MiB
    MIN_SOUND_FILE_SIZE: Final[int] = 1000


# Logging scopes
class LogScope:
    """Standardized logging scope names."""
    CONFIG = "config_loader"
    CLI = "cli"
    VALIDATION = "validation"
    ERROR_HANDLER = "error_handler"
    RESOLVER = "source_resolver"
    FETCHER = "content_fetcher"
    UPLOAD = "upload"
    CLIPBOARD = "clipboard"
    PIPELINE = "pipeline"
    ADAPTER = "adapter"


# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes for consistency."""
    NOT_FOUND = "NOT_FOUND"
    DOWNLOAD_FAILED = "DOWNLOAD_FAILED"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    UPLOAD_CANCELLED = "UPLOAD_CANCELLED"
    EMPTY_CLIPBOARD = "EMPTY_CLIPBOARD"
    INVALID_CONFIG = "INVALID_CONFIG"
    CONFIG_MISSING = "CONFIG_MISSING"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


# Notification titles shown by the failure handler, keyed by error code
ERROR_TITLES: Final[Dict[str, str]] = {
    ErrorCode.NOT_FOUND.value: "File Not Found",
    ErrorCode.DOWNLOAD_FAILED.value: "Download Failed",
    ErrorCode.UPLOAD_FAILED.value: "Upload Failed",
    ErrorCode.UPLOAD_CANCELLED.value: "Upload Cancelled",
    ErrorCode.EMPTY_CLIPBOARD.value: "Clipboard Empty",
    ErrorCode.EXTERNAL_SERVICE_ERROR.value: "Upload Failed",
}


# Compound archive suffixes, checked in order; value is the canonical extension
COMPOUND_EXTENSIONS: Final[Tuple[Tuple[Tuple[str, ...], str], ...]] = (
    (("tar.gz", "tgz"), "tar.gz"),
    (("tar.xz", "txz"), "tar.xz"),
    (("tar.bz2", "tbz2"), "tar.bz2"),
    (("tar.zst", "tzst"), "tar.zst"),
    (("tar.lz", "tlz"), "tar.lz"),
    (("tar.lzma", "tlzma"), "tar.lzma"),
)

# Content types the extension-less CDN answers with
CONTENT_TYPE_EXTENSIONS: Final[Dict[str, str]] = {
    "image/gif": "gif",
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}

# Characters that disqualify a string from being treated as a local path
UNSAFE_PATH_CHARS: Final[str] = '<>:"|\\?*'


class RemoteHosts:
    """Hosts that need special handling when downloading."""
    SHARE_PAGE: Final[str] = "tenor.com"
    EXTENSIONLESS_CDN: Final[str] = "cdn.discordapp.com"
    SHARE_PAGE_MEDIA_PATTERN: Final[str] = r'https://media[^"]*\.(?:gif|mp4)'


class SoundUrls:
    """Where the sound cues are fetched from on first use."""
    CAPTURE: Final[str] = "https://cdn.fascinated.cc/sounds/cdn/CaptureSound.wav"
    COMPLETE: Final[str] = "https://cdn.fascinated.cc/sounds/cdn/TaskCompletedSound.wav"
    ERROR: Final[str] = "https://cdn.fascinated.cc/sounds/cdn/ErrorSound.wav"


class ExternalTools:
    """Executables the adapters shell out to."""
    WL_PASTE: Final[str] = "wl-paste"
    WL_COPY: Final[str] = "wl-copy"
    EXIFTOOL: Final[str] = "exiftool"
    ZENITY: Final[str] = "zenity"
    NOTIFY_SEND: Final[str] = "notify-send"
    PW_CAT: Final[str] = "pw-cat"
    SPECTACLE: Final[str] = "spectacle"


APP_NAME: Final[str] = "CDN Upload"
