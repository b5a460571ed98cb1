"""Hashing utilities for deriving identifiers.

Used when a source record arrives without a native identifier: the record's
canonical JSON is hashed so that the same payload always yields the same id
within (and across) aggregation passes.
"""

import hashlib
import json
from typing import Any, Mapping


def hash_string(text: str) -> str:
    """Compute the SHA256 hex digest of a string.

    Args:
        text: Text to hash

    Returns:
        Hexadecimal string representation of SHA256 hash (64 characters)
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def compute_fallback_id(source_kind: str, record: Mapping[str, Any]) -> str:
    """Compute a deterministic identifier for a record lacking one.

    The id is ``<source_kind>:<sha256 of the record's sorted JSON>``. Values
    that JSON cannot encode are stringified first.

    Args:
        source_kind: Ownership tag of the record
        record: Raw record as returned by the source

    Returns:
        Identifier string, stable for identical payloads

    Example:
        >>> compute_fallback_id("internship_entity", {"title": "Intern"}).startswith("internship_entity:")
        True
    """
    canonical = json.dumps(record, sort_keys=True, default=str, ensure_ascii=False)
    return f"{source_kind}:{hash_string(canonical)}"
