
# RefreshController: re-runs the batch scheduler on a timer.

# Pattern: fire once on start + fire every interval + drop the tick if busy.
#   - exactly one timer task exists at a time; set_interval() cancels the old
#     one before installing the new one (or none, for 0)
#   - a tick never waits for the run it starts; a tick landing mid-run is
#     dropped, not queued
#   - changing the interval only affects future ticks, in-flight runs finish

import asyncio
import logging

from reachability_monitor.config import REFRESH_INTERVAL_CHOICES
from reachability_monitor.scheduler import BatchScheduler

log = logging.getLogger(__name__)


def validate_interval(interval_ms: int) -> int:
    """Accept the presets and any other non-negative value; 0 means off."""
    if interval_ms < 0:
        raise ValueError(f"refresh interval must be >= 0 ms, got {interval_ms}")
    if interval_ms not in REFRESH_INTERVAL_CHOICES:
        log.debug("Using custom refresh interval of %dms.", interval_ms)
    return int(interval_ms)


class RefreshController:

    def __init__(self, scheduler: BatchScheduler, interval_ms: int = 0) -> None:
        self._scheduler = scheduler
        self._interval_ms = validate_interval(interval_ms)
        self._timer: asyncio.Task | None = None
        self._runs: set[asyncio.Task] = set()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def timer_active(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def start(self) -> asyncio.Task:
        """Kick off the one-time startup run and install the configured timer."""
        run = self.trigger()
        self.set_interval(self._interval_ms)
        return run

    def trigger(self) -> asyncio.Task:
        """Start a batch run in the background. A no-op run if one is already going."""
        task = asyncio.create_task(self._scheduler.run_all(), name="batch-run")
        self._runs.add(task)
        task.add_done_callback(self._run_finished)
        return task

    def _run_finished(self, task: asyncio.Task) -> None:
        self._runs.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("Batch run failed: %s", exc, exc_info=exc)

    def set_interval(self, interval_ms: int) -> None:
        interval_ms = validate_interval(interval_ms)
        self._cancel_timer()
        self._interval_ms = interval_ms

        if interval_ms == 0:
            log.info("Auto refresh disabled.")
            return

        self._timer = asyncio.create_task(self._tick_forever(interval_ms / 1000), name="refresh-timer")
        log.info("Auto refresh every %.0fs.", interval_ms / 1000)

    async def aclose(self) -> None:
        """Stop the timer and let in-flight runs finish."""
        self._cancel_timer()
        if self._runs:
            await asyncio.gather(*self._runs, return_exceptions=True)

    async def _tick_forever(self, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            if self._scheduler.is_running:
                log.debug("Refresh tick dropped: previous run still in progress.")
                continue
            self.trigger()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
