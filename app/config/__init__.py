"""Configuration management module for the application tracker."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AggregationConfig,
    AppConfig,
    BackendConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MutationConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "BackendConfig",
    "MutationConfig",
    "AggregationConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
