import argparse
import asyncio
import logging
import platform
import signal
import sys

from reachability_monitor.catalog import load_catalog
from reachability_monitor.config import DEFAULT_REFRESH_INTERVAL_MS, ENDPOINTS, REFRESH_INTERVAL_CHOICES
from reachability_monitor.orchestrator import ReachabilityMonitor

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe a catalog of endpoints for reachability.")
    parser.add_argument(
        "--interval",
        type=int,
        default=DEFAULT_REFRESH_INTERVAL_MS,
        metavar="MS",
        help=f"auto refresh interval in ms, 0 disables it (presets: {', '.join(map(str, REFRESH_INTERVAL_CHOICES))})",
    )
    parser.add_argument("--once", action="store_true", help="run a single check of every endpoint and exit")
    parser.add_argument("--verbose", action="store_true", help="log every attempt")
    return parser.parse_args(argv)


async def main(args: argparse.Namespace) -> None:
    monitor = ReachabilityMonitor(load_catalog(ENDPOINTS), interval_ms=args.interval)
    loop    = asyncio.get_running_loop()

    if platform.system() != "Windows":

        def _shutdown(sig: signal.Signals) -> None:
            log.info("Received %s, shutting down gracefully...", sig.name)
            monitor.stop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _shutdown, sig)

        try:
            await monitor.run(once=args.once)
        except asyncio.CancelledError:
            log.info("Monitor stopped.")

    else:
        try:
            await monitor.run(once=args.once)
        except (asyncio.CancelledError, KeyboardInterrupt):
            log.info("Shutting down...")
            monitor.stop()
            log.info("Monitor stopped.")


if __name__ == "__main__":
    args = parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    asyncio.run(main(args))
