"""Entry point of the location daemon."""

from __future__ import annotations

import argparse
import sys
import time

from .cycling import CyclingContextProvider
from .dating import DatingContextProvider
from .location_service import LocationService
from .plugins import UnknownProviderError, get_plugin_registry
from .shared_memory import SHARED_MEMORY_NAME, SharedMemoryManager, get_shared_memory_manager

_BASE_LAT = 37.7749
_BASE_LON = -122.4194
_LAT_STEP = 0.0001
_BASE_ALT = 50.0
_ALT_STEP = 0.5


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="s2sgeo-daemon", description="Location daemon")
    parser.add_argument("--injections", type=int, default=50,
                        help="number of test locations to inject")
    parser.add_argument("--interval", type=float, default=0.1,
                        help="seconds between injected locations")
    parser.add_argument("--run-for", type=float, default=None,
                        help="seconds to keep running after injection (default: until interrupted)")
    parser.add_argument("--shm-name", default=None,
                        help=f"shared memory segment name (default: {SHARED_MEMORY_NAME})")
    return parser.parse_args(argv)


def _wait(run_for: float | None) -> None:
    if run_for is None:
        while True:
            time.sleep(1)
    deadline = time.monotonic() + run_for
    while (remaining := deadline - time.monotonic()) > 0:
        time.sleep(min(1.0, remaining))


def main(argv: list[str] | None = None) -> int:
    """Run the daemon; return the process exit status."""
    args = _parse_args(argv)
    print("================================")
    print("S2S Geospatial Adapter - Daemon")
    print("================================")

    shm = (
        get_shared_memory_manager()
        if args.shm_name is None
        else SharedMemoryManager(args.shm_name)
    )
    try:
        shm.initialize_server()
    except OSError as exc:
        print(f"Failed to initialize shared memory: {exc}", file=sys.stderr)
        return 1

    registry = get_plugin_registry()
    registry.register_provider("cycling", CyclingContextProvider)
    registry.register_provider("dating", DatingContextProvider)

    service = LocationService(shm)
    try:
        service.set_context_provider(registry.activate_provider("cycling"))
    except UnknownProviderError:
        pass

    service.start()
    try:
        print("Injecting test locations...")
        for k in range(args.injections):
            service.inject_location(
                _BASE_LAT + k * _LAT_STEP,
                _BASE_LON,
                _BASE_ALT + k * _ALT_STEP,
                time.time_ns() // 1_000_000,
            )
            time.sleep(args.interval)
        print("Location injections complete. Service running...")
        print("Press Ctrl+C to stop")
        _wait(args.run_for)
    except KeyboardInterrupt:
        pass
    finally:
        service.stop()
        shm.cleanup()
    return 0


if __name__ == "__main__":
    sys.exit(main())