"""Normalization layer: raw source records to the canonical application shape.

This module provides:
- normalize / normalize_all: total mapping from raw dicts to NormalizedApplication
- NormalizationResult: canonical record plus its raw payload
- FieldProjection: per-source table of candidate field paths
"""

from .models import UNKNOWN_POSITION, FieldProjection, NormalizationResult
from .service import (
    DIRECT_APPLICATION_FIELDS,
    INTERNSHIP_ENTITY_FIELDS,
    normalize,
    normalize_all,
)

__all__ = [
    "normalize",
    "normalize_all",
    "NormalizationResult",
    "FieldProjection",
    "DIRECT_APPLICATION_FIELDS",
    "INTERNSHIP_ENTITY_FIELDS",
    "UNKNOWN_POSITION",
]
