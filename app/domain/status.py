"""Status vocabularies and the mapping between them.

The direct-application backend stores a narrower status vocabulary than the
one shown to users. Three backend values are renamed on the way in and the
inverse rename is applied on the way out:

    backend      display
    --------     ----------
    reviewed  -> reviewing
    shortlisted -> interviewed
    hired     -> accepted

Every other value passes through unchanged. Because the display vocabulary
also contains ``shortlisted`` and ``hired``, those two canonical statuses
share a wire value with ``interviewed`` and ``accepted`` and cannot be told
apart after a round trip through the direct-application backend.
"""

from enum import Enum
from typing import Optional


class CanonicalStatus(str, Enum):
    """Display statuses used for filtering and presentation."""

    PENDING = "pending"
    REVIEWING = "reviewing"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    HIRED = "hired"


# Wire value sent to the direct-application backend for each canonical status.
# Must cover every CanonicalStatus member; checked below at import time.
TO_BACKEND: dict[CanonicalStatus, str] = {
    CanonicalStatus.PENDING: "pending",
    CanonicalStatus.REVIEWING: "reviewed",
    CanonicalStatus.SHORTLISTED: "shortlisted",
    CanonicalStatus.INTERVIEWED: "shortlisted",
    CanonicalStatus.ACCEPTED: "hired",
    CanonicalStatus.REJECTED: "rejected",
    CanonicalStatus.HIRED: "hired",
}

# Backend values that are renamed for display.
FROM_BACKEND: dict[str, CanonicalStatus] = {
    "reviewed": CanonicalStatus.REVIEWING,
    "shortlisted": CanonicalStatus.INTERVIEWED,
    "hired": CanonicalStatus.ACCEPTED,
}

DEFAULT_STATUS = CanonicalStatus.PENDING


def _check_tables() -> None:
    missing = [status.value for status in CanonicalStatus if status not in TO_BACKEND]
    if missing:
        raise RuntimeError(f"TO_BACKEND has no wire value for: {', '.join(missing)}")
    for wire, status in FROM_BACKEND.items():
        if TO_BACKEND[status] != wire:
            raise RuntimeError(
                f"FROM_BACKEND[{wire!r}] = {status.value!r} does not invert TO_BACKEND"
            )


_check_tables()


def to_display(raw_status: Optional[object]) -> str:
    """Map a backend status to its display value.

    Args:
        raw_status: Status as stored by a backend (may be missing or blank)

    Returns:
        The renamed canonical value for reviewed/shortlisted/hired, ``pending``
        for a missing or blank status, otherwise the value unchanged.
    """
    if raw_status is None:
        return DEFAULT_STATUS.value
    value = str(raw_status).strip()
    if not value:
        return DEFAULT_STATUS.value
    mapped = FROM_BACKEND.get(value)
    return mapped.value if mapped is not None else value


def to_backend(status: str) -> str:
    """Map a display status to the value the direct-application backend stores.

    Non-canonical values are sent unchanged.
    """
    try:
        return TO_BACKEND[CanonicalStatus(status)]
    except ValueError:
        return status


def round_trips(status: str) -> bool:
    """Whether writing ``status`` to the direct-application backend reads back unchanged."""
    return to_display(to_backend(status)) == status


def is_canonical(status: str) -> bool:
    """Whether ``status`` is a member of the canonical display vocabulary."""
    try:
        CanonicalStatus(status)
    except ValueError:
        return False
    return True
