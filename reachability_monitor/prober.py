import asyncio
import logging

from reachability_monitor.config import ICON_TIMEOUT_MS, PRIMARY_TIMEOUT_MS, PROBE_GRACE_MS
from reachability_monitor.models import CheckResult, ConnectivityStatus, EndpointDescriptor, utc_now
from reachability_monitor.strategy import ProbeStrategyChain

log = logging.getLogger(__name__)


class EndpointProber:
    """
    Turns one strategy-chain run into a CheckResult.

    check() never raises (task cancellation aside). It is bounded by the
    overall deadline even when the client ignores its per-attempt timeouts.
    """

    def __init__(
        self,
        chain: ProbeStrategyChain,
        deadline_ms: int = ICON_TIMEOUT_MS + PRIMARY_TIMEOUT_MS + PROBE_GRACE_MS,
    ) -> None:
        self._chain = chain
        self._deadline_s = deadline_ms / 1000

    async def check(self, descriptor: EndpointDescriptor) -> CheckResult:
        try:
            outcome = await asyncio.wait_for(self._chain.probe(descriptor), self._deadline_s)
            status, latency = outcome.status, outcome.latency_ms
        except asyncio.TimeoutError:
            log.warning("Probe for %s overran its %.1fs deadline", descriptor.id, self._deadline_s)
            status, latency = ConnectivityStatus.TIMEOUT, 0
        except asyncio.CancelledError:
            raise
        except Exception:
            log.exception("Unexpected error probing %s", descriptor.id)
            status, latency = ConnectivityStatus.ERROR, 0

        if status is not ConnectivityStatus.SUCCESS:
            latency = 0
        return CheckResult(descriptor.id, status, latency, utc_now())
