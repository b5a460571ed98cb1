"""Normalization of raw source records into NormalizedApplication.

``normalize`` is total: any dict a source returns produces a record.
Missing fields become defaults or sentinels, never exceptions.
"""

from typing import Any, Iterable, List, Mapping, Optional

from app.domain.models import NormalizedApplication, PositionType, SourceKind
from app.domain.status import to_display
from app.logging import get_logger
from app.utils.hashing import compute_fallback_id
from app.utils.timestamps import coerce_timestamp

from .models import UNKNOWN_POSITION, FieldProjection, NormalizationResult

logger = get_logger(__name__, component="normalization")


DIRECT_APPLICATION_FIELDS = FieldProjection(
    id=("_id", "id"),
    display_name=("applicant_name", "student_name"),
    position_title=("position_title", "title", "job_id.title", "internship_id.title"),
    company_name=("company_name", "job_id.company", "internship_id.company"),
    location=("location", "job_id.location", "internship_id.location"),
    created_at=("created_date", "createdAt"),
    contact_email=("applicant_email", "email"),
)

INTERNSHIP_ENTITY_FIELDS = FieldProjection(
    id=("_id", "id"),
    display_name=("student_name", "applicant_name", "posted_by", "posted_by.name"),
    position_title=("position_title", "job_title", "title"),
    company_name=("company_name", "company"),
    location=("location",),
    created_at=("createdAt", "created_date", "postedAt"),
    contact_email=("email",),
    fixed_position_type=PositionType.INTERNSHIP,
)

PROJECTIONS = {
    SourceKind.DIRECT_APPLICATION: DIRECT_APPLICATION_FIELDS,
    SourceKind.INTERNSHIP_ENTITY: INTERNSHIP_ENTITY_FIELDS,
}


def _lookup(record: Mapping[str, Any], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def _first_text(record: Mapping[str, Any], paths: Iterable[str]) -> Optional[str]:
    """Return the first candidate that is a non-empty string (or number)."""
    for path in paths:
        value = _lookup(record, path)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _first_timestamp(record: Mapping[str, Any], paths: Iterable[str]):
    for path in paths:
        parsed = coerce_timestamp(_lookup(record, path))
        if parsed is not None:
            return parsed
    return None


def _position_type(record: Mapping[str, Any], projection: FieldProjection) -> PositionType:
    if projection.fixed_position_type is not None:
        return projection.fixed_position_type

    application_type = record.get("application_type")
    if isinstance(application_type, str) and application_type.strip():
        if application_type.strip().lower() == PositionType.INTERNSHIP.value:
            return PositionType.INTERNSHIP
        return PositionType.JOB

    if record.get("internship_id") and not record.get("job_id"):
        return PositionType.INTERNSHIP
    return PositionType.JOB


def normalize(raw: Mapping[str, Any], source_kind: SourceKind) -> NormalizationResult:
    """Map one raw record to the canonical shape.

    Steps:
    1. Pick the field projection for ``source_kind``
    2. Resolve each canonical field from its candidate paths
    3. Translate the status to the display vocabulary (absent -> pending)
    4. Derive an id from the payload if the record has none
    5. Keep every unconsumed field in the raw payload

    Args:
        raw: Record as returned by a source
        source_kind: Ownership tag of the source that returned it

    Returns:
        NormalizationResult with the canonical record and its raw payload
    """
    source_kind = SourceKind(source_kind)
    projection = PROJECTIONS[source_kind]

    record_id = _first_text(raw, projection.id)
    used_fallback_id = record_id is None
    if used_fallback_id:
        record_id = compute_fallback_id(source_kind.value, raw)
        logger.warning(
            "Record has no identifier, using payload hash",
            extra={
                "event": "normalization.record.missing_id",
                "source_kind": source_kind.value,
                "record_id": record_id,
            },
        )

    application = NormalizedApplication(
        id=record_id,
        display_name=_first_text(raw, projection.display_name),
        position_title=_first_text(raw, projection.position_title) or UNKNOWN_POSITION,
        company_name=_first_text(raw, projection.company_name) or "",
        location=_first_text(raw, projection.location) or "",
        position_type=_position_type(raw, projection),
        status=to_display(raw.get("status")),
        created_at=_first_timestamp(raw, projection.created_at),
        contact_email=_first_text(raw, projection.contact_email),
        contact_phone=_first_text(raw, projection.contact_phone),
        resume_url=_first_text(raw, projection.resume_url),
        cover_letter=_first_text(raw, projection.cover_letter),
        source_kind=source_kind,
    )

    consumed = projection.consumed_keys()
    raw_payload = {key: value for key, value in raw.items() if key not in consumed}

    logger.debug(
        "Normalized record",
        extra={
            "event": "normalization.record.normalized",
            "record_id": application.id,
            "source_kind": source_kind.value,
            "status": application.status,
        },
    )

    return NormalizationResult(
        application=application,
        raw_payload=raw_payload,
        used_fallback_id=used_fallback_id,
    )


def normalize_all(records: Iterable[Mapping[str, Any]], source_kind: SourceKind) -> List[NormalizationResult]:
    """Normalize every record of one source, preserving order.

    A record that fails to normalize is logged and left out; the rest
    of the batch is unaffected.
    """
    results: List[NormalizationResult] = []
    for record in records:
        try:
            results.append(normalize(record, source_kind))
        except Exception as e:
            logger.error(
                f"Skipping record that could not be normalized: {e}",
                extra={
                    "event": "normalization.record.failed",
                    "source_kind": SourceKind(source_kind).value,
                    "record_id": record.get("_id") if isinstance(record, Mapping) else None,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
    return results
