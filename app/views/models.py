"""Filter and sort inputs for the application view."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from app.domain.models import PositionType

ALL = "all"


class SortKey(str, Enum):
    """Orderings offered for the view.

    Values are the sort parameters the listing endpoints accept.
    """

    LATEST = "-created_date"
    NAME = "student_name"
    POSITION = "position_title"


class ViewFilter(BaseModel):
    """Search text, status/type filters and sort key for one view."""

    search_term: str = Field("", description="Case-insensitive substring over name, title, company")
    status_filter: str = Field(ALL, description="Exact display status, or 'all'")
    type_filter: str = Field(ALL, description="'job', 'internship', or 'all'")
    sort_key: SortKey = Field(SortKey.LATEST, description="Ordering of the result")

    @field_validator("search_term")
    @classmethod
    def strip_search_term(cls, v: str) -> str:
        """Ignore surrounding whitespace in the search box."""
        return v.strip()

    @field_validator("status_filter")
    @classmethod
    def normalize_status_filter(cls, v: str) -> str:
        """Treat a blank status filter as 'all'."""
        stripped = v.strip()
        return stripped or ALL

    @field_validator("type_filter")
    @classmethod
    def validate_type_filter(cls, v: str) -> str:
        """Restrict the type filter to known position types."""
        stripped = v.strip().lower() or ALL
        allowed = {ALL} | {position_type.value for position_type in PositionType}
        if stripped not in allowed:
            raise ValueError(f"type_filter must be one of {sorted(allowed)}, got: {v}")
        return stripped

    model_config = {"frozen": True}
