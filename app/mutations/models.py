"""Result types for status writes."""

from dataclasses import dataclass, field
from typing import List, Optional

from app.domain.models import SourceKind


@dataclass
class MutationResult:
    """
    Outcome of one status write.

    Attributes:
        record_id: Id of the record written
        source_kind: Backend the write was routed to
        status: Display status requested
        succeeded: Whether the backend acknowledged the write
        error: Error text when the write failed
        error_type: Exception class name when the write failed
    """

    record_id: str
    source_kind: SourceKind
    status: str
    succeeded: bool
    error: Optional[str] = None
    error_type: Optional[str] = None


@dataclass
class BulkMutationResult:
    """
    Outcome of a bulk status update.

    Attributes:
        status: Display status requested for every record
        results: Per-record outcomes, in request order
        reloaded: Whether the follow-up aggregation pass ran
    """

    status: str
    results: List[MutationResult] = field(default_factory=list)
    reloaded: bool = False

    @property
    def succeeded_ids(self) -> List[str]:
        return [result.record_id for result in self.results if result.succeeded]

    @property
    def failed_ids(self) -> List[str]:
        return [result.record_id for result in self.results if not result.succeeded]

    @property
    def all_succeeded(self) -> bool:
        return all(result.succeeded for result in self.results)
