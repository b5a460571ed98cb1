"""Aggregation of both sources into one recency-sorted collection."""

import asyncio
import itertools
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.adapters.factory import SourceRegistry
from app.domain.models import ActorContext, NormalizedApplication, SourceKind
from app.logging import get_logger
from app.logging.context import log_context
from app.normalization.service import normalize_all
from app.utils.timestamps import utc_now

from .models import AggregationResult, SourceFetchStats
from .ordering import sort_by_recency

logger = get_logger(__name__, component="aggregation")


class ApplicationAggregator:
    """
    Builds the base collection for an actor.

    Recruiters get the single recruiter-scoped call. Everyone else gets both
    sources fetched concurrently; each call is guarded on its own, so a failed
    source contributes nothing instead of aborting the pass. The aggregator
    never raises: a total failure yields an empty collection.
    """

    def __init__(self, sources: SourceRegistry):
        """
        Initialize the aggregator.

        Args:
            sources: Registry holding the direct-application and internship sources
        """
        self.sources = sources
        self._pass_ids = itertools.count(1)

    def next_pass_id(self) -> int:
        """Reserve the identifier for a new pass."""
        return next(self._pass_ids)

    async def aggregate(self, actor: ActorContext) -> List[NormalizedApplication]:
        """Run one pass and return only the sorted collection."""
        result = await self.run(actor)
        return result.applications

    async def run(self, actor: ActorContext, pass_id: Optional[int] = None) -> AggregationResult:
        """
        Execute one aggregation pass.

        This method:
        1. Chooses the source calls for the actor's role
        2. Issues them concurrently and waits for all to settle
        3. Normalizes each successful result
        4. Concatenates, drops repeated ids, sorts newest first

        Args:
            actor: Caller context (role and identity)
            pass_id: Identifier to stamp on the pass (allocated if omitted)

        Returns:
            AggregationResult; failed calls are reported in source_stats
        """
        pass_id = pass_id if pass_id is not None else self.next_pass_id()
        started_at = utc_now()

        with log_context(pass_id=pass_id, actor_role=actor.role.value):
            logger.info(
                "Aggregation pass started",
                extra={"event": "aggregation.pass.started"},
            )

            try:
                fetched = await self._fetch_for(actor)
                applications, raw_payloads, duplicates = self._merge(fetched)
                stats = [stat for _, _, stat in fetched]
            except Exception as e:
                logger.error(
                    f"Unexpected error during aggregation: {e}",
                    extra={"event": "aggregation.pass.failed", "error": str(e)},
                    exc_info=True,
                )
                applications, raw_payloads, duplicates, stats = [], {}, [], []

            result = AggregationResult(
                pass_id=pass_id,
                actor=actor,
                started_at=started_at,
                finished_at=utc_now(),
                applications=applications,
                raw_payloads=raw_payloads,
                source_stats=stats,
                duplicate_ids=duplicates,
            )

            logger.info(
                "Aggregation pass completed",
                extra={
                    "event": "aggregation.pass.completed",
                    "count": len(result.applications),
                    "total_fetched": result.total_fetched,
                    "had_errors": result.had_errors,
                    "duration_ms": int(result.duration_seconds * 1000),
                },
            )
            return result

    async def _fetch_for(
        self, actor: ActorContext
    ) -> List[Tuple[SourceKind, List[Dict[str, Any]], SourceFetchStats]]:
        if actor.is_recruiter:
            return [
                await self._guarded_fetch(
                    "applications.recruiter",
                    SourceKind.DIRECT_APPLICATION,
                    self.sources.applications.fetch_recruiter_records,
                )
            ]

        # Both calls are in flight before either is awaited.
        return list(
            await asyncio.gather(
                self._guarded_fetch(
                    "applications",
                    SourceKind.DIRECT_APPLICATION,
                    self.sources.applications.fetch_records,
                ),
                self._guarded_fetch(
                    "internships",
                    SourceKind.INTERNSHIP_ENTITY,
                    self.sources.internships.fetch_records,
                ),
            )
        )

    async def _guarded_fetch(
        self,
        label: str,
        source_kind: SourceKind,
        fetch: Callable[[], List[Dict[str, Any]]],
    ) -> Tuple[SourceKind, List[Dict[str, Any]], SourceFetchStats]:
        """Run one blocking source call off the event loop; failures become []."""
        stats = SourceFetchStats(source=label, source_kind=source_kind)
        started = time.monotonic()

        try:
            records = await asyncio.to_thread(fetch)
            if records is None:
                records = []
            stats.fetched_count = len(records)
            stats.succeeded = True
        except Exception as e:
            records = []
            stats.error_message = str(e)
            logger.error(
                f"Source {label} failed, continuing without it: {e}",
                extra={
                    "event": "aggregation.source.failed",
                    "source": label,
                    "source_kind": source_kind.value,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
        finally:
            stats.duration_seconds = time.monotonic() - started

        if stats.succeeded:
            logger.debug(
                f"Fetched {stats.fetched_count} records from {label}",
                extra={
                    "event": "aggregation.source.fetched",
                    "source": label,
                    "count": stats.fetched_count,
                },
            )
        return source_kind, records, stats

    def _merge(self, fetched):
        applications: List[NormalizedApplication] = []
        raw_payloads: Dict[str, Dict[str, Any]] = {}
        duplicates: List[str] = []

        for source_kind, records, stats in fetched:
            normalized_records = normalize_all(records, source_kind)
            stats.skipped_count = len(records) - len(normalized_records)
            for normalized in normalized_records:
                application = normalized.application
                if application.id in raw_payloads:
                    duplicates.append(application.id)
                    logger.warning(
                        "Dropping record with an id already in this pass",
                        extra={
                            "event": "aggregation.record.duplicate_id",
                            "record_id": application.id,
                            "source_kind": source_kind.value,
                        },
                    )
                    continue
                applications.append(application)
                raw_payloads[application.id] = normalized.raw_payload

        return sort_by_recency(applications), raw_payloads, duplicates
