
# ReachabilityMonitor: the top-level orchestrator.

# Responsibilities:
#   - create the shared aiohttp session and connection pool
#   - wire client → strategy chain → prober → scheduler → refresh controller
#   - expose the trigger / refresh / read surfaces to whoever drives it
#   - provide a clean stop() for graceful shutdown
#
# Concurrency model:
#   one event loop, one connection pool sized for two groups of probes.
#   The scheduler bounds how many probes are in flight; the pool limit is
#   only a backstop for check_one() calls overlapping a batch run.

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime

from reachability_monitor.aggregator import Summary, summarize
from reachability_monitor.config import DEFAULT_REFRESH_INTERVAL_MS, GROUP_SIZE, USER_AGENT
from reachability_monitor.handlers import ConsoleResultHandler, ResultHandler
from reachability_monitor.http_client import ProbeHTTPClient, create_session
from reachability_monitor.models import CheckResult, EndpointDescriptor
from reachability_monitor.prober import EndpointProber
from reachability_monitor.refresh import RefreshController, validate_interval
from reachability_monitor.scheduler import BatchScheduler, RunGuard
from reachability_monitor.store import ResultStore
from reachability_monitor.strategy import ProbeStrategyChain

log = logging.getLogger(__name__)


class ReachabilityMonitor:

    def __init__(
        self,
        catalog: Sequence[EndpointDescriptor],
        interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
        handler: ResultHandler | None = None,
    ) -> None:
        self._catalog = tuple(catalog)
        self._interval_ms = interval_ms
        self._handler = handler or ConsoleResultHandler()
        self._store = ResultStore()
        self._scheduler: BatchScheduler | None = None
        self._refresh: RefreshController | None = None
        self._guard = RunGuard()
        self._stopped = asyncio.Event()

    async def run(self, once: bool = False) -> None:
        try:
            async with create_session(pool_limit=GROUP_SIZE * 2, user_agent=USER_AGENT) as session:
                chain = ProbeStrategyChain(ProbeHTTPClient(session))
                self._scheduler = BatchScheduler(
                    self._catalog, EndpointProber(chain), self._store, handler=self._handler, guard=self._guard,
                )
                self._refresh = RefreshController(self._scheduler, interval_ms=self._interval_ms)

                log.info(
                    "ReachabilityMonitor running, watching %d endpoint(s). Press Ctrl+C to stop.",
                    len(self._catalog),
                )

                if once:
                    await self._scheduler.run_all()
                    return

                self._refresh.start()
                try:
                    await self._stopped.wait()
                finally:
                    await self._refresh.aclose()
        finally:
            # the session is closed now; nothing may probe or schedule through it
            self._scheduler = self._refresh = None

    def stop(self) -> None:
        """Stop the refresh timer; in-flight runs drain before the session closes."""
        self._stopped.set()

    # ─── trigger surface ──────────────────────────────────────────────────────

    async def check_all(self) -> bool:
        return await self._require_scheduler().run_all()

    async def check_one(self, endpoint_id: str) -> CheckResult:
        return await self._require_scheduler().check_one(endpoint_id)

    # ─── refresh control surface ──────────────────────────────────────────────

    def set_refresh_interval(self, interval_ms: int) -> None:
        self._interval_ms = validate_interval(interval_ms)
        if self._refresh is not None:
            self._refresh.set_interval(self._interval_ms)

    # ─── read surface ─────────────────────────────────────────────────────────

    def snapshot(self) -> Mapping[str, CheckResult]:
        return self._store.snapshot()

    def summary(self) -> Summary:
        return summarize(self._store.snapshot(), total=len(self._catalog))

    @property
    def last_checked(self) -> datetime | None:
        """Start time of the most recent batch run, None before the first one."""
        return self._guard.last_started

    def _require_scheduler(self) -> BatchScheduler:
        if self._scheduler is None:
            raise RuntimeError("ReachabilityMonitor is not running")
        return self._scheduler
