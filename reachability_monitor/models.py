from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def format_dt(dt: datetime | None) -> str:
    """Human-readable UTC timestamp for console display."""
    if dt is None:
        return "Never"
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


class ConnectivityStatus(str, Enum):
    IDLE = "IDLE"
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    TIMEOUT = "TIMEOUT"


@dataclass(frozen=True)
class EndpointDescriptor:
    """
    One entry of the endpoint catalog. Loaded once at startup, never mutated.

    icon_url is an optional, lighter-weight probe target (a favicon or any small
    static asset). When it is missing the chain derives <origin>/favicon.ico.
    """
    id: str
    display_name: str
    url: str
    category: str
    icon_url: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class CheckResult:
    """
    The current reachability verdict for one endpoint.

    latency_ms is > 0 exactly when status is SUCCESS. The one exception is a
    PENDING placeholder, which may carry the previous latency as a display hint
    until the probe finishes.
    """
    endpoint_id: str
    status: ConnectivityStatus
    latency_ms: int
    timestamp: datetime

    @classmethod
    def pending(cls, endpoint_id: str, previous: "CheckResult | None" = None) -> "CheckResult":
        hint = previous.latency_ms if previous is not None else 0
        return cls(endpoint_id, ConnectivityStatus.PENDING, hint, utc_now())


@dataclass(frozen=True)
class Attempt:
    """One concrete outbound request: where, how, and how long we wait."""
    url: str
    method: str
    timeout_ms: int


@dataclass(frozen=True)
class Outcome:
    """Classified result of running the strategy chain for one endpoint."""
    status: ConnectivityStatus
    latency_ms: int = 0
    attempts_made: int = 0
