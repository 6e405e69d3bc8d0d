"""
Input validation utilities.
Validates command-line option values and candidate filesystem paths.
"""

import re

from shared_utils.constants import LogScope, UNSAFE_PATH_CHARS
from shared_utils.error_handler import InvalidConfigurationError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.VALIDATION)

_VOLUME_PATTERN = re.compile(r"^[0-9]*\.?[0-9]+$")
_LENGTH_PATTERN = re.compile(r"^[1-9][0-9]*$")


class InputValidator:
    """Utility class for input validation."""

    @staticmethod
    def validate_volume(value: str) -> float:
        """Validate a playback volume given on the command line.

        Args:
            value: Raw option value, e.g. "0.5"

        Returns:
            Volume as a float in the inclusive range 0.0 - 1.0

        Raises:
            InvalidConfigurationError: If the value is not a number in range
        """
        if not _VOLUME_PATTERN.match(value) or float(value) > 1.0:
            logger.warning("invalid_volume", value=value)
            raise InvalidConfigurationError(
                "Volume must be between 0 and 1", context={"value": value}
            )
        return float(value)

    @staticmethod
    def validate_filename_length(value: str) -> int:
        """Validate the random filename length given on the command line.

        Raises:
            InvalidConfigurationError: If the value is not a positive integer
        """
        if not _LENGTH_PATTERN.match(value):
            logger.warning("invalid_filename_length", value=value)
            raise InvalidConfigurationError(
                "Filename length must be a positive integer", context={"value": value}
            )
        return int(value)

    @staticmethod
    def is_safe_path(value: str) -> bool:
        """Return True when *value* is non-empty and free of characters that are
        invalid in a path on at least one common platform."""
        if not value:
            return False
        return not any(ch in UNSAFE_PATH_CHARS for ch in value)
