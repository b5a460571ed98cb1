"""Filter-sort engine for the aggregated collection."""

from .engine import matches_search, view, visible_ids
from .models import ALL, SortKey, ViewFilter

__all__ = ["view", "visible_ids", "matches_search", "ViewFilter", "SortKey", "ALL"]
