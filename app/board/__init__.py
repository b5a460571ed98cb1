"""Board tying aggregation, views, selection and mutations together."""

from .service import ApplicationBoard, build_board

__all__ = ["ApplicationBoard", "build_board"]
