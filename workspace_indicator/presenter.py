"""Console rendering of the active workspace label."""

import sys
from typing import Optional, TextIO
from .labels import LabelStore
from .monitoring.models import WorkspaceChanged


class ConsolePresenter:
    """Prints the label of the active workspace whenever it changes."""

    def __init__(self, labels: LabelStore, stream: Optional[TextIO] = None):
        self._labels = labels
        self._stream = stream or sys.stdout
        self.current_ordinal: Optional[int] = None

    def label(self, ordinal: int) -> str:
        return self._labels.name_for(ordinal)

    def on_workspace_changed(self, event: WorkspaceChanged) -> None:
        self.current_ordinal = event.ordinal
        self._render(event.ordinal)

    def _render(self, ordinal: int) -> None:
        # Padded like a status bar title
        text = f" {self.label(ordinal)} "
        print(f"🖥️  [{text}]", file=self._stream, flush=True)
