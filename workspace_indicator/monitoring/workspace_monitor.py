"""Fixed-interval polling thread that drives the workspace tracker."""

import logging
import threading
from typing import Callable, Optional
from ..config import POLL_INTERVAL
from .workspace_tracker import WorkspaceTracker

logger = logging.getLogger(__name__)


class WorkspaceMonitor:
    """Calls WorkspaceTracker.poll() on a background thread at a fixed cadence."""

    def __init__(
        self,
        tracker: WorkspaceTracker,
        interval: Optional[float] = None,
        on_tick: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the monitor.

        Args:
            tracker: Tracker to poll
            interval: Seconds between polls (defaults to config value)
            on_tick: Optional hook run after every poll, on the monitor thread
        """
        self._tracker = tracker
        self._interval = interval if interval is not None else POLL_INTERVAL
        self._on_tick = on_tick
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._wake = threading.Event()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start polling in a background thread."""
        if self._running:
            return

        self._running = True
        self._wake.clear()
        self._thread = threading.Thread(target=self._monitor_loop, name="workspace-monitor", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop polling and wait for the thread to exit."""
        self._running = False
        self._wake.set()
        if self._thread:
            self._thread.join(timeout=2.0)
        self._thread = None

    def poke(self) -> None:
        """Wake the loop so the next poll happens right away."""
        self._wake.set()

    def __enter__(self) -> "WorkspaceMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _monitor_loop(self) -> None:
        """Main polling loop."""
        while self._running:
            try:
                self._tracker.poll()
                if self._on_tick is not None:
                    self._on_tick()
            except Exception as e:
                # Continue monitoring even if one tick fails
                logger.warning("Workspace monitor error: %s", e)
                self._wait(1.0)
                continue
            self._wait(self._interval)

    def _wait(self, timeout: float) -> None:
        self._wake.wait(timeout)
        self._wake.clear()
