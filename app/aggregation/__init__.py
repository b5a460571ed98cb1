"""Aggregation of direct applications and internship entities into one collection."""

from .models import AggregationResult, SourceFetchStats
from .ordering import sort_by_recency
from .service import ApplicationAggregator

__all__ = [
    "ApplicationAggregator",
    "AggregationResult",
    "SourceFetchStats",
    "sort_by_recency",
]
