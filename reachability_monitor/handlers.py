
# result handlers: the output layer of the pipeline.

# the scheduler publishes results to the ResultStore and then hands them to a
# handler. all formatting decisions live here; CheckResult stays a pure data
# container with zero display logic.

# to add a new output target, implement a class with:
#     async def handle(self, descriptor: EndpointDescriptor, result: CheckResult) -> None: ...
#     async def handle_summary(self, summary: Summary) -> None: ...
# and pass it into BatchScheduler in orchestrator.py.

from typing import Protocol

from reachability_monitor.aggregator import Summary
from reachability_monitor.models import CheckResult, EndpointDescriptor, utc_now

# ─── Status colour map (ANSI, safe to strip if plain output is needed) ───────

_R = "\033[0m"   # reset

_STATUS_COLOR: dict[str, str] = {
    "SUCCESS": "\033[32m",   # green   : answered in time
    "TIMEOUT": "\033[33m",   # yellow  : degraded, no answer before the deadline
    "ERROR":   "\033[31m",   # red     : refused or unresolvable
    "PENDING": "\033[34m",   # blue    : probe in flight
}


def _ts() -> str:
    """ISO 8601 UTC timestamp, e.g. 2026-02-21T12:39:08Z"""
    return utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")


def _color_status(status: str) -> str:
    c = _STATUS_COLOR.get(status, "")
    return f"{c}{status}{_R}" if c else status


class ResultHandler(Protocol):
    async def handle(self, descriptor: EndpointDescriptor, result: CheckResult) -> None: ...

    async def handle_summary(self, summary: Summary) -> None: ...


class ConsoleResultHandler:
    """
    Emits one line per finished probe and one summary line per run to stdout.

    Format:
        [2026-02-21T12:39:08Z] GitHub | SUCCESS | Latency=182ms | Category=Dev
        [2026-02-21T12:39:11Z] SUMMARY | Online=15/17 | Offline=2 | AvgLatency=240ms
    """

    async def handle(self, descriptor: EndpointDescriptor, result: CheckResult) -> None:
        print(self._format(descriptor, result), flush=True)

    async def handle_summary(self, summary: Summary) -> None:
        print(
            f"[{_ts()}] SUMMARY | "
            f"Online={summary.online}/{summary.total} | "
            f"Offline={summary.offline} | "
            f"AvgLatency={summary.avg_latency_ms}ms",
            flush=True,
        )

    def _format(self, d: EndpointDescriptor, r: CheckResult) -> str:
        latency = f"{r.latency_ms}ms" if r.latency_ms > 0 else "N/A"
        return (
            f"[{r.timestamp.strftime('%Y-%m-%dT%H:%M:%SZ')}] "
            f"{d.display_name} | "
            f"{_color_status(r.status.value)} | "
            f"Latency={latency} | "
            f"Category={d.category}"
        )
