"""
Structured error handling.
Provides the exception hierarchy used by every pipeline, with error codes and context.
"""

from typing import Optional, Dict, Any
import logging

from shared_utils.constants import ERROR_TITLES, ErrorCode, LogScope
from shared_utils.logging_utils import get_scoped_logger


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def title(self) -> str:
        """Short human title used for desktop notifications."""
        return ERROR_TITLES.get(self.error_code, "Upload Failed")

    @property
    def fallback_path(self) -> Optional[str]:
        """Local file that may be copied to the clipboard when this error is handled."""
        return self.context.get("fallback_path")


class NotFoundError(AppException):
    """A file or path does not exist or cannot be read."""

    def __init__(self, message: str, path: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        ctx = {**(context or {})}
        if path:
            ctx["path"] = path
        super().__init__(
            error_code=ErrorCode.NOT_FOUND.value,
            message=message,
            context=ctx,
        )


class DownloadFailedError(AppException):
    """Remote fetch or share-page media extraction failed."""

    def __init__(self, message: str, url: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        ctx = {**(context or {})}
        if url:
            ctx["url"] = url
        super().__init__(
            error_code=ErrorCode.DOWNLOAD_FAILED.value,
            message=message,
            context=ctx,
        )


class UploadFailedError(AppException):
    """The object store rejected or failed the publish."""

    def __init__(
        self,
        message: str,
        fallback_path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = {**(context or {})}
        if fallback_path:
            ctx["fallback_path"] = fallback_path
        super().__init__(
            error_code=ErrorCode.UPLOAD_FAILED.value,
            message=message,
            context=ctx,
        )


class UploadCancelledError(AppException):
    """The user declined the large-file confirmation."""

    def __init__(self, message: str = "Upload was cancelled by user", context: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code=ErrorCode.UPLOAD_CANCELLED.value,
            message=message,
            context=context,
        )


class EmptyClipboardError(AppException):
    """Clipboard holds neither an image nor any non-blank text."""

    def __init__(self, message: str = "Clipboard is empty", context: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code=ErrorCode.EMPTY_CLIPBOARD.value,
            message=message,
            context=context,
        )


class ConfigurationError(AppException):
    """Configuration error."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code=ErrorCode.INVALID_CONFIG.value,
            message=message,
            context=context,
        )


class InvalidConfigurationError(ConfigurationError):
    """Conflicting flags or malformed option values."""


class ConfigurationMissingError(AppException):
    """A required setting or external tool is absent."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code=ErrorCode.CONFIG_MISSING.value,
            message=message,
            context=context,
        )


class ExternalServiceError(AppException):
    """An external collaborator (clipboard, notifier, ...) failed."""

    def __init__(self, service: str, message: str, context: Optional[Dict[str, Any]] = None):
        full_message = f"{service} unavailable: {message}"
        super().__init__(
            error_code=ErrorCode.EXTERNAL_SERVICE_ERROR.value,
            message=full_message,
            context={**(context or {}), "service": service},
        )


def log_exception(
    exc: Exception,
    scope: str = LogScope.ERROR_HANDLER,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log exception with structured context.

    Args:
        exc: Exception to log
        scope: Log scope identifier
        logger: Optional custom logger (uses structlog if not provided)
    """
    if logger is None:
        logger = get_scoped_logger(scope)

    if isinstance(exc, AppException):
        logger.error(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            context=exc.context
        )
    else:
        logger.error(
            "unexpected_exception",
            error_type=type(exc).__name__,
            message=str(exc),
            traceback=True
        )
