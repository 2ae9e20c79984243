"""Space snapshot sources: the interface the tracker polls and the macOS backend."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Optional
from ..config import SPACE_SOURCE
from ..exceptions import SnapshotUnavailableError, SpaceSourceNotAvailableError
from .models import Display, Snapshot, Space, build_snapshot

logger = logging.getLogger(__name__)

# Window server functions, with their PyObjC signatures.
# They are undocumented, so they are resolved at runtime from the CoreGraphics bundle.
# The Copy functions hand over ownership of their result.
_COPY_RESULT = {"retval": {"already_retained": True}}

_CGS_FUNCTIONS = [
    ("CGSMainConnectionID", b"i"),
    ("CGSGetActiveSpace", b"Qi"),
    ("CGSCopyManagedDisplaySpaces", b"@i", "", _COPY_RESULT),
    ("CGSCopyActiveMenuBarDisplayIdentifier", b"@i", "", _COPY_RESULT),
]

_COREGRAPHICS_BUNDLE_ID = "com.apple.CoreGraphics"


class SpaceSnapshotSource(ABC):
    """Abstract base class for space snapshot sources."""

    @abstractmethod
    def active_raw_id(self) -> Optional[Hashable]:
        """
        Get the raw id of the globally active space.

        Returns:
            Opaque space id, or None if no space is active
        """
        pass

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """
        Read all displays, their ordered spaces, and which space is active.

        Returns:
            Snapshot of the current state

        Raises:
            SnapshotUnavailableError: If the query fails. Implementations must
                not return partial state.
        """
        pass


class MacOSSpaceSource(SpaceSnapshotSource):
    """Snapshot source backed by the macOS window server (via PyObjC)."""

    def __init__(self):
        """
        Resolve the window server functions.

        Raises:
            SpaceSourceNotAvailableError: If PyObjC or the functions are missing
        """
        try:
            import objc
            from Foundation import NSBundle
        except ImportError as e:
            raise SpaceSourceNotAvailableError(
                "PyObjC not installed. Install with: pip install pyobjc"
            ) from e

        bundle = NSBundle.bundleWithIdentifier_(_COREGRAPHICS_BUNDLE_ID)
        if bundle is None:
            raise SpaceSourceNotAvailableError(f"Bundle '{_COREGRAPHICS_BUNDLE_ID}' not found")

        functions: Dict[str, Any] = {}
        objc.loadBundleFunctions(bundle, functions, _CGS_FUNCTIONS)
        missing = [entry[0] for entry in _CGS_FUNCTIONS if entry[0] not in functions]
        if missing:
            raise SpaceSourceNotAvailableError(
                f"Window server functions unavailable: {', '.join(missing)}"
            )

        self._main_connection_id = functions["CGSMainConnectionID"]
        self._get_active_space = functions["CGSGetActiveSpace"]
        self._copy_managed_display_spaces = functions["CGSCopyManagedDisplaySpaces"]
        self._copy_active_menu_bar_display = functions["CGSCopyActiveMenuBarDisplayIdentifier"]

    def active_raw_id(self) -> Optional[Hashable]:
        try:
            space = self._get_active_space(self._main_connection_id())
        except Exception as e:
            raise SnapshotUnavailableError(f"CGSGetActiveSpace failed: {e}") from e
        return int(space) if space else None

    def snapshot(self) -> Snapshot:
        try:
            conn = self._main_connection_id()
            active_space = self._get_active_space(conn)
            managed_displays = self._copy_managed_display_spaces(conn)
            active_display = self._copy_active_menu_bar_display(conn)
        except Exception as e:
            raise SnapshotUnavailableError(f"Window server query failed: {e}") from e

        if managed_displays is None:
            raise SnapshotUnavailableError("CGSCopyManagedDisplaySpaces returned nothing")

        active_display_id = str(active_display) if active_display is not None else None
        displays = parse_managed_display_spaces(managed_displays, active_display_id)
        return build_snapshot(
            displays,
            int(active_space) if active_space else None,
            active_display_id,
        )


def parse_managed_display_spaces(raw_displays: Any, active_display_id: Optional[str]) -> List[Display]:
    """
    Convert the window server's display/space dictionaries into Display objects.

    Displays missing their identifier or space list are skipped. A space is
    fullscreen when it carries a 'TileLayoutManager' entry.

    Args:
        raw_displays: Sequence of display dictionaries from CGSCopyManagedDisplaySpaces
        active_display_id: Identifier of the display holding the menu bar

    Returns:
        List of Display objects in the order the window server reported them
    """
    displays = []
    for raw_display in raw_displays:
        identifier = raw_display.get("Display Identifier")
        raw_spaces = raw_display.get("Spaces")
        if identifier is None or raw_spaces is None:
            logger.debug("Skipping display without identifier or spaces: %r", raw_display)
            continue

        spaces = []
        for raw_space in raw_spaces:
            space_id = raw_space.get("ManagedSpaceID")
            if space_id is None:
                continue
            spaces.append(Space(
                raw_id=int(space_id),
                is_fullscreen=raw_space.get("TileLayoutManager") is not None,
            ))

        identifier = str(identifier)
        displays.append(Display(
            identifier=identifier,
            spaces=tuple(spaces),
            is_active_display=identifier == active_display_id,
        ))
    return displays


def create_space_source(source_name: Optional[str] = None) -> SpaceSnapshotSource:
    """
    Create a snapshot source based on configuration.

    Args:
        source_name: Name of the source to create (defaults to config value)

    Returns:
        SpaceSnapshotSource instance

    Raises:
        ValueError: If source name is unknown
        SpaceSourceNotAvailableError: If the source cannot run on this machine
    """
    source = (source_name or SPACE_SOURCE).lower()

    if source == "macos":
        return MacOSSpaceSource()
    else:
        raise ValueError(f"Unknown space source '{source}'. Use 'macos'")
