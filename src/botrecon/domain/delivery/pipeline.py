"""Paginated reconciliation run: read records, plan updates, deliver batches.

Pages are read strictly one after another using the last seen record identifier
as cursor. Planned events are buffered and flushed every ``batch_size`` events;
at most one batch write is in flight, overlapping the following reads, and it is
awaited before the next flush and at shutdown.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .retry import BackoffPolicy, call_with_retry
from .stats import RunStats

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from botrecon.domain.classification import ClassificationResolver
    from botrecon.domain.model import OutboundEvent, PersonRecord
    from botrecon.domain.ports import EventSink, RecordSource
    from botrecon.domain.reconciliation import ReconciliationPlanner

    from .retry import Sleep

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 5000
DEFAULT_BATCH_SIZE = 1000
DEFAULT_PROGRESS_EVERY = 100


class ReadAbortedError(RuntimeError):
    """Raised when the record source cannot deliver the next page."""


@dataclass(slots=True, frozen=True)
class PipelineSettings:
    page_size: int = DEFAULT_PAGE_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    dry_run: bool = False
    progress_every: int = DEFAULT_PROGRESS_EVERY
    backoff: BackoffPolicy = field(default_factory=BackoffPolicy)


class ReconciliationPipeline:
    def __init__(
        self,
        *,
        source: RecordSource,
        sink: EventSink,
        resolver: ClassificationResolver,
        planner: ReconciliationPlanner,
        settings: PipelineSettings | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._source = source
        self._sink = sink
        self._resolver = resolver
        self._planner = planner
        self._settings = settings or PipelineSettings()
        self._sleep = sleep
        self._clock = clock
        self._stats = RunStats()
        self._pending_write: asyncio.Task[None] | None = None

    @property
    def stats(self) -> RunStats:
        return self._stats

    def run(self) -> RunStats:
        return asyncio.run(self.run_async())

    async def run_async(self) -> RunStats:
        settings = self._settings
        log.info(
            "Starting reconciliation: mode=%s, page_size=%s, batch_size=%s",
            "DRY-RUN" if settings.dry_run else "LIVE",
            settings.page_size,
            settings.batch_size,
        )

        buffer: list[OutboundEvent] = []
        try:
            await self._process_pages(buffer)
        except ReadAbortedError:
            log.exception("Record source failed; stopping the run")
            self._stats.aborted = True
        except Exception:
            log.exception("Critical error during processing")
            self._stats.aborted = True

        await self._flush(buffer)
        await self._drain()

        for line in self._stats.summary_lines():
            log.info(line)
        return self._stats

    async def _process_pages(self, buffer: list[OutboundEvent]) -> None:
        cursor: str | None = None
        while True:
            page = await self._read_page(cursor)
            if not page:
                break
            self._stats.pages += 1

            started = self._clock()
            for record in page:
                cursor = record.record_id
                event = self._process_record(record)
                if event is not None:
                    buffer.append(event)
                if len(buffer) >= self._settings.batch_size:
                    await self._flush(buffer)
            self._stats.classify_seconds += self._clock() - started

            log.info(
                "Page %s done: processed=%s, modified=%s, bots=%s, datacenters=%s",
                self._stats.pages,
                self._stats.processed,
                self._stats.modified,
                self._stats.bots_found,
                self._stats.datacenters_already + self._stats.datacenters_new,
            )

    async def _read_page(self, cursor: str | None) -> Sequence[PersonRecord]:
        started = self._clock()
        try:
            return await call_with_retry(
                lambda: self._source.fetch_page(cursor=cursor, limit=self._settings.page_size),
                policy=self._settings.backoff,
                context="Record fetch",
                sleep=self._sleep,
                on_retry=self._count_retry,
            )
        except Exception as exc:
            raise ReadAbortedError(f"Could not read page after cursor {cursor!r}") from exc
        finally:
            self._stats.read_seconds += self._clock() - started

    def _process_record(self, record: PersonRecord) -> OutboundEvent | None:
        classification = self._resolver.classify(
            record.current_address, record.current_user_agent
        )
        plan = self._planner.plan(
            classification,
            distinct_id=record.distinct_id,
            raw_address=record.current_address,
            previous_address=record.state.initial_address,
            state=record.state,
            user_agent=record.current_user_agent,
        )
        self._stats.record(record, plan)

        final = plan.classification
        if final.is_bot or final.is_datacenter:
            log.debug(
                "[Identify] %s%s - IP: %s, UA: %r, patch: %s",
                plan.effective_identity,
                f" (Original: {record.distinct_id})" if plan.identity_changed else "",
                record.current_address,
                record.current_user_agent,
                plan.patch,
            )

        if self._stats.processed % self._settings.progress_every == 0:
            log.debug(
                "Processed: %s | Bots: %s", self._stats.processed, self._stats.bots_found
            )
        return plan.event

    async def _flush(self, buffer: list[OutboundEvent]) -> None:
        if not buffer:
            return
        batch = list(buffer)
        buffer.clear()

        if self._settings.dry_run:
            log.info("Dry run: would send %s events", len(batch))
            for event in batch:
                log.info("Dry run event: %s", event)
            return

        await self._drain()
        self._pending_write = asyncio.create_task(self._write(batch))

    async def _drain(self) -> None:
        pending, self._pending_write = self._pending_write, None
        if pending is not None:
            await pending

    async def _write(self, batch: list[OutboundEvent]) -> None:
        started = self._clock()
        try:
            await call_with_retry(
                lambda: self._sink.send_batch(batch),
                policy=self._settings.backoff,
                context="Send batch",
                sleep=self._sleep,
                on_retry=self._count_retry,
            )
        except Exception:
            log.exception("Batch of %s events could not be delivered", len(batch))
            self._stats.errors += len(batch)
        else:
            self._stats.delivered += len(batch)
        finally:
            self._stats.write_seconds += self._clock() - started

    def _count_retry(self, _attempt: int, _wait: float) -> None:
        self._stats.retries += 1
