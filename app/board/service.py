"""Application board: the base collection for one actor plus its actions.

The board owns the state a listing page would hold (base collection, raw
payload side table, filters, selection) and wires the aggregator, the view
engine, the selection manager and the mutation coordinator around it.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional

import requests

from app.adapters.factory import SourceRegistry, build_sources
from app.aggregation.models import AggregationResult
from app.aggregation.service import ApplicationAggregator
from app.config.environment import EnvironmentConfig
from app.config.models import AppConfig
from app.domain.models import ActorContext, NormalizedApplication
from app.logging import get_logger
from app.mutations import BulkMutationResult, MutationResult, StatusMutationCoordinator
from app.selection import SelectionManager
from app.views import ViewFilter, view

logger = get_logger(__name__, component="board")


class ApplicationBoard:
    """
    Holds the aggregated applications for one actor.

    Every pass is stamped with an increasing id. With ``discard_stale_passes``
    on, a pass that finishes after a newer one was requested is dropped, so
    the newest request always wins. With it off, whichever pass finishes
    last replaces the collection.
    """

    def __init__(
        self,
        aggregator: ApplicationAggregator,
        sources: SourceRegistry,
        actor: ActorContext,
        discard_stale_passes: bool = True,
        max_concurrent_writes: Optional[int] = None,
    ):
        self.aggregator = aggregator
        self.sources = sources
        self.actor = actor
        self.discard_stale_passes = discard_stale_passes

        self.applications: List[NormalizedApplication] = []
        self.raw_payloads: Dict[str, Dict[str, Any]] = {}
        self.last_result: Optional[AggregationResult] = None
        self.filters = ViewFilter()
        self.selection = SelectionManager()

        self.coordinator = StatusMutationCoordinator(
            sources,
            reload=self.reload,
            max_concurrent_writes=max_concurrent_writes,
        )
        self._latest_pass_id = 0

    async def reload(self) -> bool:
        """
        Run an aggregation pass and install its result.

        Returns:
            True if the result replaced the collection, False if it was stale
        """
        pass_id = self.aggregator.next_pass_id()
        self._latest_pass_id = pass_id

        result = await self.aggregator.run(self.actor, pass_id=pass_id)

        if self.discard_stale_passes and pass_id != self._latest_pass_id:
            logger.info(
                "Discarding result of superseded aggregation pass",
                extra={
                    "event": "board.pass.stale",
                    "pass_id": pass_id,
                    "latest_pass_id": self._latest_pass_id,
                },
            )
            return False

        self.applications = result.applications
        self.raw_payloads = result.raw_payloads
        self.last_result = result
        return True

    def set_filters(self, **changes: Any) -> ViewFilter:
        """Replace some filter fields; the rest keep their current value."""
        self.filters = ViewFilter(**{**self.filters.model_dump(), **changes})
        return self.filters

    def visible(self) -> List[NormalizedApplication]:
        """The base collection under the current filters."""
        return view(self.applications, self.filters)

    def visible_ids(self) -> List[str]:
        return [application.id for application in self.visible()]

    def get(self, record_id: str) -> NormalizedApplication:
        """
        Look up a record in the current base collection.

        Raises:
            KeyError: If no record has this id
        """
        for application in self.applications:
            if application.id == record_id:
                return application
        raise KeyError(record_id)

    def raw_payload(self, record_id: str) -> Dict[str, Any]:
        """Untouched source record for ``record_id`` (raises KeyError if absent)."""
        return self.raw_payloads[record_id]

    def toggle(self, record_id: str) -> bool:
        return self.selection.toggle(record_id)

    def select_all(self, checked: bool = True) -> set:
        """Select every record in the current filtered view, or clear."""
        return self.selection.select_all(checked, self.visible_ids())

    def clear_selection(self) -> None:
        self.selection.clear()

    def selected_applications(self) -> List[NormalizedApplication]:
        """Selected records that are in the current collection, in collection order."""
        by_id = {application.id: application for application in self.applications}
        return [by_id[record_id] for record_id in self.selection.ordered(by_id)]

    async def has_applied(self, job_id: Optional[str] = None, internship_id: Optional[str] = None) -> bool:
        """Ask the applications backend whether the actor already applied to a posting."""
        return await asyncio.to_thread(
            self.sources.applications.has_applied, job_id=job_id, internship_id=internship_id
        )

    async def set_status(self, record_id: str, status: str) -> MutationResult:
        """
        Change one record's status.

        Raises:
            KeyError: If the id is not in the current collection
        """
        return await self.coordinator.set_status(self.get(record_id), status)

    async def set_status_bulk(
        self, status: str, record_ids: Optional[Iterable[str]] = None
    ) -> BulkMutationResult:
        """
        Change the status of the selected records (or of ``record_ids``).

        Selected ids that are no longer in the collection are skipped. The
        selection is cleared once the writes and the reload have finished.
        """
        if record_ids is None:
            wanted = self.selection.selected
            records = self.selected_applications()
        else:
            wanted = set(record_ids)
            records = [application for application in self.applications if application.id in wanted]
        missing = wanted - {record.id for record in records}
        if missing:
            logger.warning(
                f"Skipping {len(missing)} selected ids not in the current collection",
                extra={"event": "board.bulk.missing_ids", "record_ids": sorted(missing)},
            )

        result = await self.coordinator.set_status_bulk(records, status)
        self.selection.clear()
        return result

    def close(self) -> None:
        self.sources.close()


def build_board(
    app_config: AppConfig,
    env_config: Optional[EnvironmentConfig],
    actor: ActorContext,
    session: Optional[requests.Session] = None,
) -> ApplicationBoard:
    """Create the sources, aggregator and board described by configuration."""
    sources = build_sources(app_config, env_config, session=session)
    return ApplicationBoard(
        ApplicationAggregator(sources),
        sources,
        actor,
        discard_stale_passes=app_config.aggregation.discard_stale_passes,
        max_concurrent_writes=app_config.bulk_write_limit,
    )
