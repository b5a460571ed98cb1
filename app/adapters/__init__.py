"""Backend sources for applications and internship postings.

Two sources are provided:
- Direct applications: direct_applications.DirectApplicationSource
- Internship entities: internships.InternshipSource

Use the factory to build both from configuration:
    from app.adapters.factory import build_sources
    registry = build_sources(app_config, env_config)
    records = registry.applications.fetch_records()
    registry.for_kind(record.source_kind).set_status(record.id, "rejected")

Exception handling:
    from app.adapters.exceptions import AdapterError, AdapterHTTPError, AdapterTimeoutError, AdapterResponseError
"""

from .base import BaseSource, RawRecord
from .direct_applications import DirectApplicationSource
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
    UnknownSourceKindError,
)
from .factory import SourceRegistry, build_sources
from .internships import InternshipSource

__all__ = [
    # Base and factory
    "BaseSource",
    "RawRecord",
    "SourceRegistry",
    "build_sources",
    # Sources
    "DirectApplicationSource",
    "InternshipSource",
    # Exceptions
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
    "UnknownSourceKindError",
]
