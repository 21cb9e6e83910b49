import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

DEFAULT_TIME_FMT = "YYYYMMDDHHmmss Z"


class ParserSettings(BaseSettings):
    """Parser defaults loaded from environment variables.

    Validates configuration at import time to catch misconfiguration early.
    """

    time_fmt: str = DEFAULT_TIME_FMT
    strict_time: bool = True
    read_chunk_size: int = 64 * 1024  # Bytes per read when streaming files
    http_timeout_sec: float = 120.0
    http_max_retries: int = 3
    http_backoff_factor: float = 2.0

    model_config = SettingsConfigDict(
        env_prefix="XMLTV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("time_fmt")
    @classmethod
    def validate_time_fmt(cls, value: str) -> str:
        """Reject blank time formats."""
        if not value.strip():
            raise ValueError("time_fmt must not be empty")
        return value

    @field_validator("read_chunk_size", "http_max_retries")
    @classmethod
    def validate_positive_ints(cls, value: int, info) -> int:
        """Ensure integer settings are positive."""
        if value <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return value

    @field_validator("http_timeout_sec")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value <= 0:
            raise ValueError("http_timeout_sec must be > 0")
        return value

    @field_validator("http_backoff_factor")
    @classmethod
    def validate_backoff_factor(cls, value: float) -> float:
        """Ensure the backoff factor is at least 1."""
        if value < 1:
            raise ValueError("http_backoff_factor must be >= 1")
        return value

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.debug("Parser configuration loaded:")
        logger.debug("  Time Format: %s", self.time_fmt)
        logger.debug("  Strict Time: %s", self.strict_time)
        logger.debug("  Read Chunk Size: %s bytes", self.read_chunk_size)
        logger.debug(
            "  HTTP: timeout=%.1fs retries=%s backoff=%.1f",
            self.http_timeout_sec,
            self.http_max_retries,
            self.http_backoff_factor,
        )


settings = ParserSettings()
