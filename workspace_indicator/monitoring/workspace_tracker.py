"""Active-space change detection and ordinal computation."""

import logging
from typing import Callable, Hashable, List, Optional
from ..exceptions import UnresolvedActiveSpaceError
from .models import MAIN_DISPLAY_ID, Display, Snapshot, Space, WorkspaceChanged
from .space_source import SpaceSnapshotSource

logger = logging.getLogger(__name__)

WorkspaceListener = Callable[[WorkspaceChanged], None]


def find_active_display(snapshot: Snapshot) -> Optional[Display]:
    """
    Pick the display the active space is reported on.

    The main display wins; otherwise the display matching the snapshot's
    active-display identifier.

    Args:
        snapshot: Snapshot to search

    Returns:
        Matching Display, or None if no display matches
    """
    return snapshot.find_display(MAIN_DISPLAY_ID) or snapshot.find_display(snapshot.active_display_id)


def filtered_spaces(snapshot: Snapshot) -> List[Space]:
    """Non-fullscreen spaces of every display, concatenated in enumeration order."""
    return [
        space
        for display in snapshot.displays
        for space in display.spaces
        if not space.is_fullscreen
    ]


def compute_ordinal(spaces: List[Space], raw_id: Hashable) -> int:
    """
    Get the 1-based position of a space in a filtered sequence.

    Args:
        spaces: Filtered space sequence
        raw_id: Raw id to locate

    Returns:
        1-based ordinal

    Raises:
        UnresolvedActiveSpaceError: If raw_id is not in the sequence
    """
    for index, space in enumerate(spaces, start=1):
        if space.raw_id == raw_id:
            return index
    raise UnresolvedActiveSpaceError(f"Space {raw_id!r} not found among {len(spaces)} candidate spaces")


def resolve_ordinal(snapshot: Snapshot) -> int:
    """
    Compute the ordinal of the snapshot's active space.

    Raises:
        UnresolvedActiveSpaceError: If no display matches or the active space
            is not a candidate (e.g., it is fullscreen)
    """
    if find_active_display(snapshot) is None:
        raise UnresolvedActiveSpaceError(
            f"No display matches '{MAIN_DISPLAY_ID}' or '{snapshot.active_display_id}'"
        )
    return compute_ordinal(filtered_spaces(snapshot), snapshot.active_raw_id)


class WorkspaceTracker:
    """Polls a snapshot source and emits WorkspaceChanged events on real transitions."""

    def __init__(self, source: SpaceSnapshotSource):
        """
        Initialize the tracker.

        Args:
            source: Snapshot source to poll
        """
        self._source = source
        self._listeners: List[WorkspaceListener] = []
        self.last_seen_active_raw_id: Optional[Hashable] = None
        self.current_ordinal: Optional[int] = None

    def subscribe(self, listener: WorkspaceListener) -> Callable[[], None]:
        """
        Register a listener for WorkspaceChanged events.

        Args:
            listener: Callable receiving each event, on the polling thread

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: WorkspaceListener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def reset(self) -> None:
        """Forget the last seen space so the next successful poll emits again."""
        self.last_seen_active_raw_id = None

    def poll(self) -> Optional[WorkspaceChanged]:
        """
        Check the active space once and emit an event if it changed.

        Snapshot failures and unresolved spaces leave state untouched; they are
        retried on the next call.

        Returns:
            The emitted event, or None if nothing was emitted
        """
        try:
            # Cheap check first; the full snapshot is only read on a change
            if self._source.active_raw_id() == self.last_seen_active_raw_id:
                return None
            snapshot = self._source.snapshot()
        except Exception as e:
            logger.debug("Snapshot unavailable, skipping tick: %s", e)
            return None

        active_raw_id = snapshot.active_raw_id
        if active_raw_id == self.last_seen_active_raw_id:
            return None

        try:
            ordinal = resolve_ordinal(snapshot)
        except UnresolvedActiveSpaceError as e:
            logger.debug("Active space unresolved, keeping previous state: %s", e)
            return None

        self.last_seen_active_raw_id = active_raw_id
        self.current_ordinal = ordinal
        logger.info("Switched to space number %d (id %r)", ordinal, active_raw_id)

        event = WorkspaceChanged(ordinal=ordinal, raw_id=active_raw_id)
        self._emit(event)
        return event

    def _emit(self, event: WorkspaceChanged) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # One broken listener must not starve the others
                logger.warning("Workspace listener %r failed: %s", listener, e)
