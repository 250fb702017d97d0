
# BatchScheduler: runs the prober over the whole catalog.

# Responsibilities:
#   - refuse to start a second run while one is in flight (RunGuard)
#   - flip every endpoint to PENDING immediately, before any network I/O
#   - probe the catalog in fixed-size groups: concurrent inside a group,
#     sequential across groups, so at most GROUP_SIZE probes are in flight
#   - publish each group's results to the ResultStore in one swap
#
# Concurrency model:
#   everything runs on one event loop. The guard check-and-set has no await
#   in between, so it is atomic without a lock. Probe failures are data
#   (ERROR / TIMEOUT results), never scheduler failures.

import asyncio
import logging
from collections.abc import Iterator, Sequence
from datetime import datetime

from reachability_monitor.aggregator import Summary, summarize
from reachability_monitor.config import GROUP_SIZE
from reachability_monitor.handlers import ResultHandler
from reachability_monitor.models import CheckResult, EndpointDescriptor, format_dt, utc_now
from reachability_monitor.prober import EndpointProber
from reachability_monitor.store import ResultStore

log = logging.getLogger(__name__)


class RunGuard:
    """In-flight flag for batch runs. At most one holder at a time."""

    def __init__(self) -> None:
        self._held = False
        self.last_started: datetime | None = None

    @property
    def held(self) -> bool:
        return self._held

    def try_acquire(self) -> bool:
        if self._held:
            return False
        self._held = True
        self.last_started = utc_now()
        return True

    def release(self) -> None:
        self._held = False


def chunked(items: Sequence[EndpointDescriptor], size: int) -> Iterator[Sequence[EndpointDescriptor]]:
    """Consecutive slices of at most `size` items, in order."""
    if size < 1:
        raise ValueError(f"group size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


class BatchScheduler:

    def __init__(
        self,
        catalog: Sequence[EndpointDescriptor],
        prober: EndpointProber,
        store: ResultStore,
        handler: ResultHandler | None = None,
        group_size: int = GROUP_SIZE,
        guard: RunGuard | None = None,
    ) -> None:
        if group_size < 1:
            raise ValueError(f"group size must be >= 1, got {group_size}")
        self._catalog = tuple(catalog)
        self._by_id = {d.id: d for d in self._catalog}
        self._prober = prober
        self._store = store
        self._handler = handler
        self._group_size = group_size
        self.guard = guard or RunGuard()

    @property
    def is_running(self) -> bool:
        return self.guard.held

    @property
    def store(self) -> ResultStore:
        return self._store

    async def run_all(self) -> bool:
        """
        Probe the whole catalog once.

        Returns False without doing anything if a run is already in flight,
        True once this run has published every group.
        """
        if not self.guard.try_acquire():
            log.debug("Run already in progress, dropping trigger.")
            return False

        try:
            self._store.publish(
                CheckResult.pending(d.id, self._store.get(d.id)) for d in self._catalog
            )

            groups = list(chunked(self._catalog, self._group_size))
            log.info(
                "Run started %s: checking %d endpoint(s) in %d group(s) of up to %d.",
                format_dt(self.guard.last_started), len(self._catalog), len(groups), self._group_size,
            )

            for number, group in enumerate(groups, start=1):
                results = await asyncio.gather(*(self._prober.check(d) for d in group))
                self._store.publish(results)
                log.debug("Group %d/%d published (%d result(s)).", number, len(groups), len(results))
                await self._notify(group, results)

            summary = self.summary()
            log.info(
                "Run finished: %d/%d online, %d offline, avg latency %dms.",
                summary.online, summary.total, summary.offline, summary.avg_latency_ms,
            )
            await self._notify_summary(summary)
            return True

        finally:
            self.guard.release()

    async def check_one(self, endpoint_id: str) -> CheckResult:
        """
        Probe a single endpoint outside of the batch, e.g. a manual refresh.

        Raises:
            KeyError  for an id that is not in the catalog
        """
        descriptor = self._by_id[endpoint_id]
        self._store.publish([CheckResult.pending(endpoint_id)])
        result = await self._prober.check(descriptor)
        self._store.publish([result])
        await self._notify([descriptor], [result])
        return result

    def summary(self) -> Summary:
        return summarize(self._store.snapshot(), total=len(self._catalog))

    async def _notify(self, group: Sequence[EndpointDescriptor], results: Sequence[CheckResult]) -> None:
        if self._handler is None:
            return
        for descriptor, result in zip(group, results):
            try:
                await self._handler.handle(descriptor, result)
            except Exception:
                log.exception("Result handler failed for %s", descriptor.id)

    async def _notify_summary(self, summary: Summary) -> None:
        if self._handler is None:
            return
        try:
            await self._handler.handle_summary(summary)
        except Exception:
            log.exception("Result handler failed on run summary")
