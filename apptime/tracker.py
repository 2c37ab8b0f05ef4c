#!/usr/bin/env python3
"""
Background service recording foreground application time.
"""
import signal
from types import FrameType
from typing import Optional
from .config import DATA_FILE, DEBUG_MODE, DEBUG_LOG_PATH, log
from .platform import get_platform
from .services import TrackingLoop
from .store import UsageStore


def create_tracker(path: str = DATA_FILE) -> TrackingLoop:
    """Load the usage log and build a loop around it."""
    store = UsageStore(path)
    data = store.load()
    log(f"Loaded {len(data)} day(s) from {path}")
    return TrackingLoop(store)


def _on_sigterm(signum: int, frame: Optional[FrameType]) -> None:
    raise KeyboardInterrupt


def interrupt_on_sigterm() -> None:
    """
    Turn SIGTERM into KeyboardInterrupt in the main thread.

    Entry points rely on this so their finally blocks flush the store.
    """
    signal.signal(signal.SIGTERM, _on_sigterm)


def main() -> None:
    """Run the tracking loop in the foreground until interrupted."""
    get_platform()
    loop = create_tracker()
    interrupt_on_sigterm()

    log("tracker_start")
    if DEBUG_MODE:
        print(f"Debug logging enabled: {DEBUG_LOG_PATH}")

    try:
        loop.run()
    except KeyboardInterrupt:
        print("\nTracker stopping.")
    finally:
        loop.stop()
        log("tracker_stop")


if __name__ == "__main__":
    main()
