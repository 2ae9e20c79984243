"""Reports the active macOS space and maps it to a user-chosen label."""

from .labels import LabelStore, parse_mapping
from .monitoring import WorkspaceChanged, WorkspaceMonitor, WorkspaceTracker

__all__ = [
    "LabelStore",
    "parse_mapping",
    "WorkspaceChanged",
    "WorkspaceMonitor",
    "WorkspaceTracker",
]

__version__ = "0.1.0"
