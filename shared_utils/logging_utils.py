"""
Centralized logging utilities with scoped loggers and decorators.
Provides structured logging with consistent field names across components.
"""

import functools
import logging
import sys
import time
from typing import Any, Callable, Optional
from enum import Enum

import structlog

from shared_utils.constants import LogScope


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "INFO", json_output: bool = False, stream: Optional[Any] = None) -> None:
    """Configure structlog on top of the stdlib logging module.

    Logs go to stderr so that stdout stays free for the tool's own output.
    Console-friendly rendering is the default; JSON is available for piping
    into log collectors.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        json_output: Render each event as one JSON object per line
        stream: Output stream, defaults to sys.stderr
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level.upper())


configure_logging()


def get_scoped_logger(scope: str) -> structlog.BoundLogger:
    """Get a scoped logger for a specific component.

    Args:
        scope: LogScope value (cli, upload, clipboard, adapter, ...)

    Returns:
        Structured logger bound to scope.
    """
    logger = structlog.get_logger()
    return logger.bind(scope=scope)


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def log_execution(scope: str = LogScope.PIPELINE, level: str = LogLevel.INFO.value):
    """Decorator to automatically log function execution time and results.

    Args:
        scope: Log scope identifier
        level: Log level used for the start/success events

    Example:
        @log_execution(scope=LogScope.UPLOAD)
        def upload(artifact):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger = get_scoped_logger(scope)
            log = getattr(logger, level.lower())
            start_time = time.time()

            log(
                f"{func.__name__}_start",
                func_name=func.__name__,
            )

            try:
                result = func(*args, **kwargs)
                elapsed = time.time() - start_time

                log(
                    f"{func.__name__}_success",
                    func_name=func.__name__,
                    elapsed_seconds=round(elapsed, 3),
                    result_type=type(result).__name__
                )
                return result

            except Exception as e:
                elapsed = time.time() - start_time
                logger.error(
                    f"{func.__name__}_failed",
                    func_name=func.__name__,
                    elapsed_seconds=round(elapsed, 3),
                    error_type=type(e).__name__,
                    error_message=str(e)
                )
                raise

        return wrapper
    return decorator
