"""Space monitoring package: snapshot sources, change detection and the polling thread."""

from .models import MAIN_DISPLAY_ID, Display, Snapshot, Space, WorkspaceChanged, build_snapshot
from .space_source import SpaceSnapshotSource, MacOSSpaceSource, create_space_source
from .workspace_tracker import WorkspaceTracker, compute_ordinal, filtered_spaces, resolve_ordinal
from .workspace_monitor import WorkspaceMonitor

__all__ = [
    'MAIN_DISPLAY_ID',
    'Display',
    'Snapshot',
    'Space',
    'WorkspaceChanged',
    'build_snapshot',
    'SpaceSnapshotSource',
    'MacOSSpaceSource',
    'create_space_source',
    'WorkspaceTracker',
    'compute_ordinal',
    'filtered_spaces',
    'resolve_ordinal',
    'WorkspaceMonitor',
]
