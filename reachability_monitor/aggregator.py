from collections.abc import Mapping
from dataclasses import dataclass

from reachability_monitor.models import CheckResult, ConnectivityStatus


@dataclass(frozen=True)
class Summary:
    total: int
    online: int
    offline: int
    pending: int
    avg_latency_ms: int


def summarize(results: Mapping[str, CheckResult], total: int | None = None) -> Summary:
    """
    Fold a ResultStore snapshot into dashboard numbers.

    The average only counts entries with a latency, so PENDING placeholders
    still holding the previous run's hint keep the figure stable mid-run.
    """
    online = offline = pending = 0
    latencies: list[int] = []
    for result in results.values():
        if result.status is ConnectivityStatus.SUCCESS:
            online += 1
        elif result.status in (ConnectivityStatus.ERROR, ConnectivityStatus.TIMEOUT):
            offline += 1
        elif result.status is ConnectivityStatus.PENDING:
            pending += 1
        if result.latency_ms > 0:
            latencies.append(result.latency_ms)

    avg = round(sum(latencies) / len(latencies)) if latencies else 0
    return Summary(
        total=len(results) if total is None else total,
        online=online,
        offline=offline,
        pending=pending,
        avg_latency_ms=avg,
    )
