from collections.abc import Iterable, Mapping
from types import MappingProxyType

from reachability_monitor.models import CheckResult, ConnectivityStatus


class ResultStore:
    """
    endpoint_id → current CheckResult.

    Single writer (the scheduler), any number of readers. Every write builds a
    new dict and swaps it in with one assignment, so a reader holding a
    snapshot never sees half of a group updated. Keys are only ever
    overwritten, never removed: a missing key means "never probed".
    """

    def __init__(self) -> None:
        self._results: dict[str, CheckResult] = {}

    def publish(self, results: Iterable[CheckResult]) -> None:
        merged = dict(self._results)
        for result in results:
            merged[result.endpoint_id] = result
        self._results = merged

    def snapshot(self) -> Mapping[str, CheckResult]:
        return MappingProxyType(self._results)

    def get(self, endpoint_id: str) -> CheckResult | None:
        return self._results.get(endpoint_id)

    def status(self, endpoint_id: str) -> ConnectivityStatus:
        """IDLE for an endpoint that was never probed, else its current status."""
        result = self._results.get(endpoint_id)
        return ConnectivityStatus.IDLE if result is None else result.status

    def __len__(self) -> int:
        return len(self._results)
