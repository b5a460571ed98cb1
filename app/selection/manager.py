"""Set of record ids chosen for a bulk action."""

from typing import Iterable, List, Set

from app.logging import get_logger

logger = get_logger(__name__, component="selection")


class SelectionManager:
    """
    Tracks selected record ids.

    ``select_all`` only ever draws from the ids the caller says are visible,
    so selecting everything under an active filter selects just that subset.
    Selection is not tied to a particular base collection: ids that vanish on
    a reload stay selected until cleared or toggled off.
    """

    def __init__(self):
        self._selected: Set[str] = set()

    @property
    def selected(self) -> Set[str]:
        """Copy of the selected ids."""
        return set(self._selected)

    def ordered(self, view_ids: Iterable[str]) -> List[str]:
        """Selected ids in the order they appear in ``view_ids``."""
        return [record_id for record_id in view_ids if record_id in self._selected]

    def toggle(self, record_id: str) -> bool:
        """
        Flip membership of one id.

        Returns:
            True if the id is selected afterwards
        """
        if record_id in self._selected:
            self._selected.discard(record_id)
            return False
        self._selected.add(record_id)
        return True

    def select_all(self, checked: bool, view_ids: Iterable[str]) -> Set[str]:
        """
        Select every visible id, or clear the selection.

        Args:
            checked: True to select the visible ids, False to clear
            view_ids: Ids of the records in the current filtered view

        Returns:
            The resulting selection
        """
        if checked:
            self._selected = set(view_ids)
        else:
            self._selected = set()

        logger.debug(
            "Selection replaced",
            extra={"event": "selection.select_all", "checked": checked, "count": len(self._selected)},
        )
        return self.selected

    def clear(self) -> None:
        self._selected.clear()

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __bool__(self) -> bool:
        return bool(self._selected)
