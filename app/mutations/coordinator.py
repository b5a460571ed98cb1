"""Routing of status changes to the backend that owns each record."""

import asyncio
import contextlib
from typing import Any, Awaitable, Callable, Iterable, Optional

from app.adapters.factory import SourceRegistry
from app.domain.models import NormalizedApplication
from app.domain.status import CanonicalStatus, is_canonical
from app.logging import get_logger
from app.logging.context import log_context

from .models import BulkMutationResult, MutationResult

logger = get_logger(__name__, component="mutation")

ReloadCallable = Callable[[], Awaitable[Any]]


class StatusMutationCoordinator:
    """
    Applies status changes through the source named by each record's tag.

    Single updates patch the in-memory record once the backend confirms.
    Bulk updates fan out one write per record, wait for every write to
    settle, then trigger a full reload instead of patching records one by
    one. Failures never raise; they come back in the result objects.
    """

    def __init__(
        self,
        sources: SourceRegistry,
        reload: Optional[ReloadCallable] = None,
        max_concurrent_writes: Optional[int] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            sources: Registry used to resolve a record's owning source
            reload: Coroutine function run after a bulk update settles
            max_concurrent_writes: Cap on in-flight bulk writes (None or 0 = unlimited)
        """
        self.sources = sources
        self.reload = reload
        self.max_concurrent_writes = max_concurrent_writes or None

    async def set_status(self, record: NormalizedApplication, new_status: str) -> MutationResult:
        """
        Write one status change and apply it locally after confirmation.

        Args:
            record: Record from the current base collection (mutated in place on success)
            new_status: Display status to set

        Returns:
            MutationResult; on failure the record is left unchanged
        """
        new_status = self._check_status(new_status)
        result = await self._write(record, new_status)
        if result.succeeded:
            record.status = new_status
        return result

    async def set_status_bulk(
        self, records: Iterable[NormalizedApplication], new_status: str
    ) -> BulkMutationResult:
        """
        Write the same status to many records concurrently, then reload.

        Each write is guarded on its own so one failure does not cancel the
        rest. Local records are not patched; the reload replaces them.

        Args:
            records: Records to update (may come from both sources)
            new_status: Display status to set

        Returns:
            BulkMutationResult with per-record outcomes
        """
        new_status = self._check_status(new_status)
        records = list(records)
        bulk = BulkMutationResult(status=new_status)
        if not records:
            return bulk

        limiter = asyncio.Semaphore(self.max_concurrent_writes) if self.max_concurrent_writes else None

        logger.info(
            f"Bulk status update of {len(records)} records to '{new_status}'",
            extra={
                "event": "mutation.bulk.started",
                "count": len(records),
                "status": new_status,
                "concurrency_limit": self.max_concurrent_writes,
            },
        )

        bulk.results = list(
            await asyncio.gather(*(self._write(record, new_status, limiter) for record in records))
        )

        if self.reload is not None:
            try:
                await self.reload()
                bulk.reloaded = True
            except Exception as e:
                logger.error(
                    f"Reload after bulk update failed: {e}",
                    extra={"event": "mutation.bulk.reload_failed", "error": str(e)},
                    exc_info=True,
                )

        logger.info(
            "Bulk status update completed",
            extra={
                "event": "mutation.bulk.completed",
                "succeeded": len(bulk.succeeded_ids),
                "failed": len(bulk.failed_ids),
                "reloaded": bulk.reloaded,
            },
        )
        return bulk

    @staticmethod
    def _check_status(new_status) -> str:
        if isinstance(new_status, CanonicalStatus):
            return new_status.value
        if not isinstance(new_status, str) or not new_status.strip():
            raise ValueError(f"Status must be a non-empty string, got: {new_status!r}")
        new_status = new_status.strip()
        if not is_canonical(new_status):
            logger.warning(
                f"Status '{new_status}' is outside the canonical set and is written as given",
                extra={"event": "mutation.status.noncanonical", "status": new_status},
            )
        return new_status

    async def _write(
        self,
        record: NormalizedApplication,
        new_status: str,
        limiter: Optional[asyncio.Semaphore] = None,
    ) -> MutationResult:
        """Send one write to the record's owning source; never raises."""
        with log_context(record_id=record.id, source_kind=record.source_kind.value):
            try:
                source = self.sources.for_kind(record.source_kind)
                async with limiter or contextlib.nullcontext():
                    await asyncio.to_thread(source.set_status, record.id, new_status)
            except Exception as e:
                logger.error(
                    f"Status update failed for {record.id}: {e}",
                    extra={
                        "event": "mutation.status.failed",
                        "status": new_status,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
                return MutationResult(
                    record_id=record.id,
                    source_kind=record.source_kind,
                    status=new_status,
                    succeeded=False,
                    error=str(e),
                    error_type=type(e).__name__,
                )

            logger.info(
                f"Status of {record.id} set to '{new_status}'",
                extra={"event": "mutation.status.updated", "status": new_status},
            )
            return MutationResult(
                record_id=record.id,
                source_kind=record.source_kind,
                status=new_status,
                succeeded=True,
            )
