
# Reachability HTTP client.

# Only transport success is observed, never the status code:
#   a 200, a 403 from a WAF and a 503 all prove the host answered.
#   Only "no answer before the deadline" or "could not connect" count as down.

# Every request is built to look like a fresh, anonymous visit:
#   - Cache-Control / Pragma: no-cache  → force a live round trip
#   - the session uses a DummyCookieJar → no cookies stored or sent
#   - no Referer header                 → nothing leaks about where we come from
#   - a per-attempt ClientTimeout       → one hung host can't stall the others

import asyncio
import logging
import time

import aiohttp

from reachability_monitor.errors import ProbeTimeout, TransportError

log = logging.getLogger(__name__)

_NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class ProbeHTTPClient:
    """
    Wraps an aiohttp.ClientSession and times single request attempts.

    One instance is shared by every probe (via the shared session and its
    connection pool).
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        self._session = session

    async def fetch(self, url: str, method: str, timeout_ms: int) -> int:
        """
        Issue one request and return the elapsed milliseconds until the
        response headers arrived.

        Raises:
            ProbeTimeout     the deadline elapsed first
            TransportError   anything else went wrong on the way
        """
        start = time.perf_counter()
        try:
            async with self._session.request(
                method,
                url,
                headers=_NO_CACHE_HEADERS,
                allow_redirects=False,
                timeout=aiohttp.ClientTimeout(total=timeout_ms / 1000),
            ) as resp:
                elapsed_ms = round((time.perf_counter() - start) * 1000)
                log.debug("%s %s answered %d in %dms", method, url, resp.status, elapsed_ms)
                return elapsed_ms

        except asyncio.TimeoutError as exc:
            log.debug("Timeout after %dms on %s %s", timeout_ms, method, url)
            raise ProbeTimeout(f"{method} {url} timed out after {timeout_ms}ms") from exc
        except (aiohttp.ClientError, OSError, ValueError) as exc:
            log.debug("Transport error on %s %s: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc


def create_session(pool_limit: int, user_agent: str) -> aiohttp.ClientSession:
    """Build the shared session every probe goes through. Caller owns closing it."""
    connector = aiohttp.TCPConnector(limit=pool_limit, force_close=True)
    return aiohttp.ClientSession(
        connector=connector,
        cookie_jar=aiohttp.DummyCookieJar(),
        headers={"User-Agent": user_agent},
        auto_decompress=False,
    )
