"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class BackendConfig(BaseModel):
    """Connection settings for the applications/internships API."""

    base_url: str = Field(..., min_length=1, description="Base URL of the backend API")
    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for backend calls (seconds)"
    )
    user_agent: str = Field(
        "ApplicationTracker/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        stripped = v.strip()
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got: {v}")
        return stripped.rstrip("/")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class MutationConfig(BaseModel):
    """Status write settings."""

    max_concurrent_writes: int = Field(
        0, ge=0, description="Cap on in-flight writes during a bulk update (0 = unlimited)"
    )


class AggregationConfig(BaseModel):
    """Aggregation pass settings."""

    discard_stale_passes: bool = Field(
        True,
        description="Drop a pass result that arrives after a newer pass has started",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for the application tracker."""

    backend: BackendConfig = Field(..., description="Backend API settings")
    mutations: MutationConfig = Field(default_factory=MutationConfig, description="Write settings")
    aggregation: AggregationConfig = Field(
        default_factory=AggregationConfig, description="Aggregation settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @property
    def bulk_write_limit(self) -> Optional[int]:
        """Concurrency cap for bulk writes, or None when unlimited."""
        return self.mutations.max_concurrent_writes or None
