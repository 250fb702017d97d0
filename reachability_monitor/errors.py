
# failure taxonomy for a single probe attempt.
# none of these ever leave the prober: they are folded into a CheckResult status.


class ProbeError(Exception):
    """Base class for everything an attempt can fail with."""


class ProbeTimeout(ProbeError):
    """The attempt's deadline elapsed before any response arrived."""


class TransportError(ProbeError):
    """Connection refused, DNS failure, TLS failure, reset... anything but a deadline."""


class ConfigError(ProbeError):
    """The attempt's URL is malformed or could not be derived from the descriptor."""
