"""Main entry point for the workspace indicator."""

import logging
import sys
import time
from typing import Optional
from .config import (
    POLL_INTERVAL, MAPPING_FILE, RELOAD_HOTKEY, HOTKEY_ENABLED, LOG_LEVEL
)
from .exceptions import HotkeyError, SpaceSourceNotAvailableError
from .hotkey import ReloadHotkeyListener
from .labels import LabelStore
from .monitoring import WorkspaceMonitor, WorkspaceTracker, create_space_source
from .presenter import ConsolePresenter

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the command-line entry point."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_help():
    """Print welcome message."""
    print("=" * 60)
    print("Workspace Indicator")
    print("=" * 60)
    print(f"\nMapping file: {MAPPING_FILE}")
    print("  Format: one '<number>: <name>' per line, '#' starts a comment")
    print(f"Polling every {POLL_INTERVAL:.2f}s")
    if HOTKEY_ENABLED:
        print(f"Press {RELOAD_HOTKEY} to reload the mapping file")
    print("Press Ctrl+C to quit")
    print("=" * 60 + "\n")


def make_reload_handler(labels: LabelStore, tracker: WorkspaceTracker, monitor: WorkspaceMonitor):
    """
    Build the "Reload Configuration" action.

    Returns:
        Callable that reloads the mapping and re-emits the current workspace on the next poll
    """
    def reload_configuration() -> None:
        labels.reload()
        tracker.reset()
        monitor.poke()

    return reload_configuration


def make_tick_handler(labels: LabelStore, tracker: WorkspaceTracker):
    """
    Build the per-tick hook that picks up mapping file edits.

    Returns:
        Callable that reloads a changed mapping file and makes the next poll
        re-emit the current workspace with its new label
    """
    def check_mapping_file() -> None:
        if labels.refresh_if_stale():
            tracker.reset()

    return check_mapping_file


def main() -> int:
    """Main application loop."""
    configure_logging()

    try:
        source = create_space_source()
    except SpaceSourceNotAvailableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    labels = LabelStore(MAPPING_FILE)
    tracker = WorkspaceTracker(source)
    presenter = ConsolePresenter(labels)
    tracker.subscribe(presenter.on_workspace_changed)

    # The staleness check runs on the monitor thread, after each poll
    monitor = WorkspaceMonitor(tracker, POLL_INTERVAL, on_tick=make_tick_handler(labels, tracker))

    hotkey_listener: Optional[ReloadHotkeyListener] = None
    if HOTKEY_ENABLED:
        hotkey_listener = ReloadHotkeyListener(
            make_reload_handler(labels, tracker, monitor),
            RELOAD_HOTKEY,
        )

    print_help()

    with monitor:
        if hotkey_listener is not None:
            try:
                hotkey_listener.start()
            except HotkeyError as e:
                logger.warning("%s", e)
                hotkey_listener = None
        try:
            while True:
                time.sleep(1.0)
        except KeyboardInterrupt:
            print("\n\nInterrupted. Goodbye!")
        finally:
            if hotkey_listener is not None:
                hotkey_listener.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
