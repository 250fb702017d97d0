
# ProbeStrategyChain: decides whether one endpoint is reachable.

# Fallback order (fixed, deterministic):
#   1. GET icon_url, or <origin>/favicon.ico when the descriptor has none  (ICON_TIMEOUT_MS)
#   2. GET the endpoint's own url                                          (PRIMARY_TIMEOUT_MS)
#
# The primary url is the authoritative fallback when the asset is missing or blocked.
#
# Classification:
#   - first success wins and short-circuits the chain; its latency is reported,
#     latencies of earlier failed attempts are discarded
#   - all attempts failed and at least one hit its deadline → TIMEOUT
#   - all attempts failed without a deadline involved        → ERROR
#   - an attempt whose url can't be built is skipped; if none are left → ERROR

import logging
from typing import Protocol
from urllib.parse import SplitResult, urlsplit, urlunsplit

from reachability_monitor.config import ICON_TIMEOUT_MS, PRIMARY_TIMEOUT_MS
from reachability_monitor.errors import ConfigError, ProbeTimeout, TransportError
from reachability_monitor.models import Attempt, ConnectivityStatus, EndpointDescriptor, Outcome

log = logging.getLogger(__name__)


class AttemptClient(Protocol):
    async def fetch(self, url: str, method: str, timeout_ms: int) -> int: ...


def validate_url(url: str | None) -> str:
    """
    Return url if it is an absolute http(s) url, else raise ConfigError.

    Any user:password part is dropped so it never turns into an Authorization header.
    """
    if not url:
        raise ConfigError("empty url")
    try:
        parts = urlsplit(url.strip())
        _ = parts.port  # raises ValueError on a garbage port
    except ValueError as exc:
        raise ConfigError(f"unparsable url {url!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ConfigError(f"not an absolute http(s) url: {url!r}")
    if parts.username is not None or parts.password is not None:
        parts = parts._replace(netloc=_host_port(parts))
    return urlunsplit(parts)


def _host_port(parts: SplitResult) -> str:
    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    return host if parts.port is None else f"{host}:{parts.port}"


def favicon_url(url: str) -> str:
    """<scheme>://<host[:port]>/favicon.ico for the given page url."""
    parts = urlsplit(validate_url(url))
    return f"{parts.scheme}://{parts.netloc}/favicon.ico"


def build_attempts(descriptor: EndpointDescriptor) -> tuple[list[Attempt], list[ConfigError]]:
    """
    Build the ordered attempt list for one endpoint.

    Returns the attempts that could be built and the ConfigErrors for the ones
    that couldn't (those are skipped, not fatal).
    """
    attempts: list[Attempt] = []
    skipped: list[ConfigError] = []

    try:
        icon = validate_url(descriptor.icon_url) if descriptor.icon_url else favicon_url(descriptor.url)
        attempts.append(Attempt(icon, "GET", ICON_TIMEOUT_MS))
    except ConfigError as exc:
        skipped.append(exc)

    try:
        primary = validate_url(descriptor.url)
    except ConfigError as exc:
        skipped.append(exc)
    else:
        if attempts and attempts[0].url == primary:
            # same target twice would only double the wait; keep the longer deadline
            attempts[0] = Attempt(primary, "GET", max(ICON_TIMEOUT_MS, PRIMARY_TIMEOUT_MS))
        else:
            attempts.append(Attempt(primary, "GET", PRIMARY_TIMEOUT_MS))

    return attempts, skipped


class ProbeStrategyChain:

    def __init__(self, client: AttemptClient) -> None:
        self._client = client

    async def probe(self, descriptor: EndpointDescriptor) -> Outcome:
        attempts, skipped = build_attempts(descriptor)
        for exc in skipped:
            log.warning("Skipping attempt for %s: %s", descriptor.id, exc)

        if not attempts:
            return Outcome(ConnectivityStatus.ERROR)

        timed_out = False
        made = 0
        for attempt in attempts:
            made += 1
            try:
                elapsed = await self._client.fetch(attempt.url, attempt.method, attempt.timeout_ms)
            except ProbeTimeout:
                timed_out = True
                log.debug("%s: attempt %d (%s) timed out", descriptor.id, made, attempt.url)
            except TransportError as exc:
                log.debug("%s: attempt %d (%s) failed: %s", descriptor.id, made, attempt.url, exc)
            else:
                # a sub-millisecond answer still has to read as "reachable"
                return Outcome(ConnectivityStatus.SUCCESS, max(1, elapsed), made)

        status = ConnectivityStatus.TIMEOUT if timed_out else ConnectivityStatus.ERROR
        return Outcome(status, 0, made)
