"""Selection of records for bulk actions."""

from .manager import SelectionManager

__all__ = ["SelectionManager"]
