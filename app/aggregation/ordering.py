"""Recency ordering for aggregated collections."""

from typing import Iterable, List

from app.domain.models import NormalizedApplication


def recency_key(application: NormalizedApplication):
    """Sort key placing newest first and records without a timestamp last."""
    if application.created_at is None:
        return (1, 0.0)
    return (0, -application.created_at.timestamp())


def sort_by_recency(applications: Iterable[NormalizedApplication]) -> List[NormalizedApplication]:
    """Return applications ordered by created_at descending.

    The sort is stable: records with equal timestamps, and records without
    one, keep their relative input order.
    """
    return sorted(applications, key=recency_key)
