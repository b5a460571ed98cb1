"""Utility functions for hashing and time handling."""

from .hashing import compute_fallback_id, hash_string
from .timestamps import (
    coerce_timestamp,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    # Hashing
    "compute_fallback_id",
    "hash_string",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "coerce_timestamp",
    "format_timestamp",
]
