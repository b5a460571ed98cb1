"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        api_base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.api_base_url = api_base_url
        self.api_token = api_token
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - API_BASE_URL: Overrides backend.base_url from the config file
    - API_TOKEN: Bearer token forwarded on every backend request
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to log records (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    api_base_url = os.getenv("API_BASE_URL") or None
    api_token = os.getenv("API_TOKEN") or None
    log_level = os.getenv("LOG_LEVEL") or None
    environment = os.getenv("ENVIRONMENT") or None

    if api_base_url and not api_base_url.strip().startswith(("http://", "https://")):
        errors.append(
            f"Invalid API_BASE_URL: '{api_base_url}'. Must start with http:// or https://."
        )

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        api_base_url=api_base_url.strip().rstrip("/") if api_base_url else None,
        api_token=api_token.strip() if api_token else None,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )
