"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    backend = config_dict.get("backend", {})
    if isinstance(backend, dict):
        base_url = backend.get("base_url")
        if isinstance(base_url, str) and base_url.strip().startswith("http://"):
            host = base_url.strip()[len("http://"):].split("/")[0].split(":")[0]
            if host not in ("localhost", "127.0.0.1"):
                warning_messages.append(
                    f"backend.base_url ({base_url}) is not HTTPS; bearer tokens will be sent in clear text"
                )

    mutations = config_dict.get("mutations", {})
    if isinstance(mutations, dict):
        limit = mutations.get("max_concurrent_writes", 0)
        if isinstance(limit, int) and limit > 100:
            warning_messages.append(
                f"Large max_concurrent_writes ({limit}) may over-subscribe the backend"
            )

    aggregation = config_dict.get("aggregation", {})
    if isinstance(aggregation, dict) and aggregation.get("discard_stale_passes") is False:
        warning_messages.append(
            "aggregation.discard_stale_passes is off: a slow earlier pass can overwrite a newer one"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
