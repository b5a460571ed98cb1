"""Data models for the normalization layer."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from app.domain.models import NormalizedApplication, PositionType, SourceKind

UNKNOWN_POSITION = "Unknown Position"


@dataclass(frozen=True)
class FieldProjection:
    """Where each canonical field is read from for one source kind.

    Every tuple lists candidate paths in priority order; the first present,
    non-empty value wins. A dotted path such as ``job_id.title`` reads a
    field of a nested (populated) reference.

    Attributes:
        id: Native identifier paths
        display_name: Applicant or poster name paths
        position_title: Title paths, falling back to ``UNKNOWN_POSITION``
        company_name: Company paths
        location: Location paths
        created_at: Creation timestamp paths
        contact_email: Email paths
        contact_phone: Phone paths
        resume_url: Resume link paths
        cover_letter: Cover letter paths
        fixed_position_type: Position type for every record of this kind, or
            None to derive it from ``application_type``
    """

    id: Tuple[str, ...]
    display_name: Tuple[str, ...]
    position_title: Tuple[str, ...]
    company_name: Tuple[str, ...]
    location: Tuple[str, ...]
    created_at: Tuple[str, ...]
    contact_email: Tuple[str, ...]
    contact_phone: Tuple[str, ...] = ("phone",)
    resume_url: Tuple[str, ...] = ("resume_url",)
    cover_letter: Tuple[str, ...] = ("cover_letter",)
    fixed_position_type: Optional[PositionType] = None

    def consumed_keys(self) -> frozenset:
        """Top-level keys whose whole value lands in the canonical shape.

        Nested references (``job_id`` when read as ``job_id.title``) are not
        consumed and stay in the raw payload.
        """
        paths = (
            self.id + self.display_name + self.position_title + self.company_name
            + self.location + self.created_at + self.contact_email + self.contact_phone
            + self.resume_url + self.cover_letter
        )
        keys = {path for path in paths if "." not in path}
        keys.update({"status", "application_type"})
        return frozenset(keys)


@dataclass
class NormalizationResult:
    """Result of normalizing a single raw record.

    Attributes:
        application: Canonical record
        raw_payload: Source fields the canonical shape does not cover
        used_fallback_id: True if the record had no native identifier
    """

    application: NormalizedApplication
    raw_payload: Dict[str, Any] = field(default_factory=dict)
    used_fallback_id: bool = False

    @property
    def source_kind(self) -> SourceKind:
        return self.application.source_kind
