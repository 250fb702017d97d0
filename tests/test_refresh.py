from __future__ import annotations

import asyncio
import logging

import pytest

from reachability_monitor.refresh import RefreshController, validate_interval


class _FakeScheduler:
    def __init__(self, run_seconds: float = 0.0) -> None:
        self.is_running = False
        self.runs = 0
        self.finished = 0
        self._run_seconds = run_seconds

    async def run_all(self) -> bool:
        if self.is_running:
            return False
        self.is_running = True
        self.runs += 1
        try:
            await asyncio.sleep(self._run_seconds)
        finally:
            self.is_running = False
        self.finished += 1
        return True


@pytest.mark.parametrize("interval_ms", [0, 10_000, 30_000, 60_000, 300_000, 12_345])
def test_validate_interval_accepts_presets_and_custom_values(interval_ms: int) -> None:
    assert validate_interval(interval_ms) == interval_ms


def test_validate_interval_rejects_negative_values() -> None:
    with pytest.raises(ValueError):
        validate_interval(-1)


@pytest.mark.asyncio
async def test_enabling_then_disabling_leaves_no_timer() -> None:
    controller = RefreshController(_FakeScheduler())

    controller.set_interval(30_000)
    first_timer = controller._timer
    assert controller.timer_active is True

    controller.set_interval(0)
    await asyncio.sleep(0)

    assert controller.timer_active is False
    assert controller.interval_ms == 0
    assert first_timer.cancelled()


@pytest.mark.asyncio
async def test_changing_interval_replaces_the_timer() -> None:
    controller = RefreshController(_FakeScheduler())

    controller.set_interval(10_000)
    old = controller._timer
    controller.set_interval(60_000)
    await asyncio.sleep(0)

    assert old.cancelled()
    assert controller.timer_active is True
    assert controller._timer is not old
    await controller.aclose()
    assert controller.timer_active is False


@pytest.mark.asyncio
async def test_start_runs_once_immediately_without_a_timer_when_disabled() -> None:
    scheduler = _FakeScheduler()
    controller = RefreshController(scheduler, interval_ms=0)

    assert await controller.start() is True

    assert scheduler.runs == 1
    assert controller.timer_active is False


@pytest.mark.asyncio
async def test_timer_ticks_trigger_repeated_runs() -> None:
    scheduler = _FakeScheduler()
    controller = RefreshController(scheduler)

    controller.set_interval(20)
    await asyncio.sleep(0.09)
    await controller.aclose()

    assert scheduler.runs >= 2


@pytest.mark.asyncio
async def test_ticks_during_a_run_are_dropped_not_queued() -> None:
    scheduler = _FakeScheduler(run_seconds=0.1)
    controller = RefreshController(scheduler, interval_ms=10)

    controller.start()
    await asyncio.sleep(0.05)
    assert scheduler.runs == 1

    controller.set_interval(0)
    await controller.aclose()
    assert scheduler.runs == 1
    assert scheduler.finished == 1


@pytest.mark.asyncio
async def test_interval_change_does_not_abort_in_flight_run() -> None:
    scheduler = _FakeScheduler(run_seconds=0.03)
    controller = RefreshController(scheduler, interval_ms=30_000)

    run = controller.start()
    await asyncio.sleep(0)
    controller.set_interval(0)

    assert await run is True
    assert scheduler.finished == 1


@pytest.mark.asyncio
async def test_failed_background_run_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    class _Broken(_FakeScheduler):
        async def run_all(self) -> bool:
            raise RuntimeError("scheduler bug")

    controller = RefreshController(_Broken())

    with caplog.at_level(logging.ERROR, logger="reachability_monitor.refresh"):
        controller.trigger()
        await controller.aclose()
        await asyncio.sleep(0)

    assert any("Batch run failed: scheduler bug" in r.getMessage() for r in caplog.records)
    assert controller._runs == set()
