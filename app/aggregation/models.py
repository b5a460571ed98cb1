"""Data models for aggregation pass tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.domain.models import ActorContext, NormalizedApplication, SourceKind


@dataclass
class SourceFetchStats:
    """
    Outcome of one source call within an aggregation pass.

    Attributes:
        source: Label of the call (applications, applications.recruiter, internships)
        source_kind: Ownership tag given to the records it returned
        fetched_count: Number of raw records returned
        succeeded: Whether the call completed without error
        skipped_count: Records left out because they could not be normalized
        error_message: Error text when the call failed
        duration_seconds: Wall time spent on the call
    """

    source: str
    source_kind: SourceKind
    fetched_count: int = 0
    skipped_count: int = 0
    succeeded: bool = False
    error_message: Optional[str] = None
    duration_seconds: float = 0.0


@dataclass
class AggregationResult:
    """
    Output of one aggregation pass.

    Attributes:
        pass_id: Increasing identifier of the pass
        actor: Actor the pass was run for
        started_at: UTC timestamp when the pass began
        finished_at: UTC timestamp when the pass completed
        applications: Merged collection, most recent first
        raw_payloads: Source-specific fields by application id
        source_stats: Per-call outcomes
        duplicate_ids: Ids dropped because an earlier record already used them
    """

    pass_id: int
    actor: ActorContext
    started_at: datetime
    finished_at: datetime
    applications: List[NormalizedApplication] = field(default_factory=list)
    raw_payloads: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    source_stats: List[SourceFetchStats] = field(default_factory=list)
    duplicate_ids: List[str] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        """Whether any source call failed during the pass."""
        return any(not stats.succeeded for stats in self.source_stats)

    @property
    def total_fetched(self) -> int:
        return sum(stats.fetched_count for stats in self.source_stats)

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    def by_id(self) -> Dict[str, NormalizedApplication]:
        """Index the collection by application id."""
        return {application.id: application for application in self.applications}
