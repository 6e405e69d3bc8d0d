from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import tempfile

from shared_utils.constants import Defaults


class Settings(BaseSettings):
    """Process-wide configuration with environment variable precedence.

    Precedence: 1) Init kwargs (CLI overrides) > 2) Environment Variables > 3) .env file > 4) Class defaults

    Object-store credentials and the public URL base have no defaults and must
    come from the environment. Instances are frozen: configuration is loaded
    once at startup and never mutated.
    """
    # Object store (MinIO / S3-compatible)
    minio_endpoint: str
    minio_access_key: str
    minio_secret_key: str
    minio_region: str = Defaults.MINIO_REGION
    bucket_name: str

    # Public URL prefix under which uploaded keys are served
    url_base: str

    # Behaviour
    sound_volume: float = Defaults.SOUND_VOLUME
    filename_length: int = Defaults.FILENAME_LENGTH
    request_timeout: float = Defaults.REQUEST_TIMEOUT

    # Local state
    history_log_path: str = Defaults.HISTORY_LOG_PATH
    sound_cache_dir: str = tempfile.gettempdir()
    log_level: str = Defaults.LOG_LEVEL

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore", frozen=True)

    @field_validator("sound_volume")
    @classmethod
    def validate_sound_volume(cls, v: float) -> float:
        """Volume must be within the inclusive range 0.0 - 1.0."""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"sound_volume must be between 0 and 1, got {v}")
        return v

    @field_validator("filename_length")
    @classmethod
    def validate_filename_length(cls, v: int) -> int:
        """Random filenames need at least one character."""
        if v < 1:
            raise ValueError(f"filename_length must be a positive integer, got {v}")
        return v

    @field_validator("url_base")
    @classmethod
    def validate_url_base(cls, v: str) -> str:
        """Strip the trailing slash so keys can be joined with a single '/'."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"url_base must be an http(s) URL, got {v}")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()
