"""Data models for space snapshots."""

from dataclasses import dataclass, field
from typing import Any, Hashable, List, Optional, Tuple

# Display identifier the window server uses for the built-in / primary display
MAIN_DISPLAY_ID = "Main"


@dataclass(frozen=True)
class Space:
    """A single space as reported by the snapshot source."""
    raw_id: Hashable
    is_fullscreen: bool = False


@dataclass(frozen=True)
class Display:
    """A display and its spaces, in the order the snapshot source reported them."""
    identifier: str
    spaces: Tuple[Space, ...] = field(default_factory=tuple)
    is_active_display: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time view of all displays and which space is active."""
    displays: Tuple[Display, ...]
    active_raw_id: Optional[Hashable]
    active_display_id: Optional[str] = None

    def find_display(self, identifier: Optional[str]) -> Optional[Display]:
        """Return the first display whose identifier matches, or None."""
        if identifier is None:
            return None
        for display in self.displays:
            if display.identifier == identifier:
                return display
        return None


@dataclass(frozen=True)
class WorkspaceChanged:
    """Event emitted when the active space resolves to a new ordinal."""
    ordinal: int
    raw_id: Any = None


def build_snapshot(displays: List[Display], active_raw_id: Optional[Hashable],
                   active_display_id: Optional[str] = None) -> Snapshot:
    """
    Build a Snapshot from a list of displays.

    Args:
        displays: Displays in enumeration order
        active_raw_id: Raw id of the globally active space
        active_display_id: Identifier of the display holding the menu bar.
            Defaults to the first display flagged is_active_display.

    Returns:
        Snapshot with displays frozen into a tuple
    """
    if active_display_id is None:
        for display in displays:
            if display.is_active_display:
                active_display_id = display.identifier
                break
    return Snapshot(
        displays=tuple(displays),
        active_raw_id=active_raw_id,
        active_display_id=active_display_id,
    )
