#!/usr/bin/env python3
"""Verify that config.example.yaml matches the configuration schema."""

import sys
from pathlib import Path

import yaml

from app.config.loader import validate_config_file


def verify_config_structure(config_file: Path = Path("config.example.yaml")) -> bool:
    """Validate the example file and print a short summary."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    if not validate_config_file(config_file):
        return False

    with open(config_file, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    backend = config.get("backend", {})
    mutations = config.get("mutations", {})
    aggregation = config.get("aggregation", {})
    print(f"  - Backend: {backend.get('base_url')}")
    print(f"  - Request timeout: {backend.get('http_request_timeout', 30)}s")
    print(f"  - Bulk write limit: {mutations.get('max_concurrent_writes', 0) or 'unlimited'}")
    print(f"  - Discard stale passes: {aggregation.get('discard_stale_passes', True)}")
    return True


if __name__ == "__main__":
    sys.exit(0 if verify_config_structure() else 1)
