from __future__ import annotations

import asyncio

import pytest

from reachability_monitor.errors import TransportError
from reachability_monitor.models import CheckResult, ConnectivityStatus, EndpointDescriptor, utc_now


def make_endpoint(
    endpoint_id: str,
    url: str | None = None,
    icon_url: str | None = None,
    category: str = "Dev",
) -> EndpointDescriptor:
    return EndpointDescriptor(
        id=endpoint_id,
        display_name=endpoint_id.title(),
        url=url or f"https://{endpoint_id}.example.com",
        category=category,
        icon_url=icon_url,
    )


class FakeClient:
    """Answers fetch() from a url → latency-or-exception table; unknown urls are refused."""

    def __init__(self, table: dict[str, int | Exception] | None = None) -> None:
        self.table = table or {}
        self.calls: list[tuple[str, str, int]] = []

    async def fetch(self, url: str, method: str, timeout_ms: int) -> int:
        self.calls.append((url, method, timeout_ms))
        outcome = self.table.get(url, TransportError(f"connection refused: {url}"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class GatedProber:
    """
    Stand-in for EndpointProber. Every check() waits for `gate` to open and
    then reports SUCCESS with the configured latency (or ERROR when 0).
    """

    def __init__(self, latencies: dict[str, int] | None = None, open_gate: bool = True) -> None:
        self.latencies = latencies or {}
        self.gate = asyncio.Event()
        if open_gate:
            self.gate.set()
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.on_call = None

    async def check(self, descriptor: EndpointDescriptor) -> CheckResult:
        self.calls.append(descriptor.id)
        if self.on_call is not None:
            self.on_call(descriptor)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await self.gate.wait()
            await asyncio.sleep(0)
        finally:
            self.in_flight -= 1
        latency = self.latencies.get(descriptor.id, 50)
        status = ConnectivityStatus.SUCCESS if latency > 0 else ConnectivityStatus.ERROR
        return CheckResult(descriptor.id, status, latency, utc_now())


@pytest.fixture
def seven_endpoints() -> list[EndpointDescriptor]:
    return [make_endpoint(f"site{i}") for i in range(1, 8)]
