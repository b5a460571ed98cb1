"""Pure filter/sort transformation over a base collection.

``view`` never mutates its input and depends only on its arguments, so
applying the same filter twice gives the same result in the same order.
"""

from typing import Callable, Dict, List, Optional, Sequence

from app.domain.models import NormalizedApplication

from .models import ALL, SortKey, ViewFilter


def matches_search(application: NormalizedApplication, term: str) -> bool:
    """Whether name, title or company contains ``term`` (case-insensitive)."""
    if not term:
        return True
    needle = term.casefold()
    for value in (application.display_name, application.position_title, application.company_name):
        if value and needle in value.casefold():
            return True
    return False


def _text_key(value: Optional[str]):
    # Missing values sort after every present one.
    if not value:
        return (1, "")
    return (0, value.casefold())


_SORT_KEYS: Dict[SortKey, Callable[[NormalizedApplication], tuple]] = {
    SortKey.NAME: lambda application: _text_key(application.display_name),
    SortKey.POSITION: lambda application: _text_key(application.position_title),
}


def view(
    base: Sequence[NormalizedApplication],
    filters: Optional[ViewFilter] = None,
) -> List[NormalizedApplication]:
    """Filter and optionally re-sort the base collection.

    Filters compose with AND:
    - search_term: substring of display_name, position_title or company_name
    - status_filter: exact status match unless "all"
    - type_filter: exact position_type match unless "all"

    With the default sort key the base order (newest first) is kept. Name
    and position keys apply a stable case-insensitive sort.

    Args:
        base: Collection produced by the aggregator
        filters: View settings (defaults to no filtering, latest first)

    Returns:
        New list holding the matching records
    """
    filters = filters or ViewFilter()

    result = [
        application
        for application in base
        if matches_search(application, filters.search_term)
        and (filters.status_filter == ALL or application.status == filters.status_filter)
        and (filters.type_filter == ALL or application.position_type.value == filters.type_filter)
    ]

    sort_key = _SORT_KEYS.get(filters.sort_key)
    if sort_key is not None:
        result.sort(key=sort_key)
    return result


def visible_ids(base: Sequence[NormalizedApplication], filters: Optional[ViewFilter] = None) -> List[str]:
    """Ids of the records ``view`` would return, in view order."""
    return [application.id for application in view(base, filters)]
