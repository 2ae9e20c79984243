"""Custom exception classes for the workspace indicator."""

from typing import Optional


class WorkspaceIndicatorError(Exception):
    """Base exception for workspace indicator errors."""
    pass


class SnapshotError(WorkspaceIndicatorError):
    """Exception raised for space snapshot errors."""
    pass


class SnapshotUnavailableError(SnapshotError):
    """Exception raised when the space snapshot could not be read this tick."""
    pass


class SpaceSourceNotAvailableError(SnapshotError):
    """Exception raised when a snapshot source cannot run here (e.g., PyObjC missing)."""
    pass


class UnresolvedActiveSpaceError(WorkspaceIndicatorError):
    """Exception raised when the active space has no position in the filtered sequence."""
    pass


class MappingFileError(WorkspaceIndicatorError):
    """Exception raised when the mapping file exists but cannot be read."""

    def __init__(self, message: str, mtime: Optional[int] = None):
        super().__init__(message)
        self.mtime = mtime


class HotkeyError(WorkspaceIndicatorError):
    """Exception raised when the reload hotkey cannot be registered."""
    pass
