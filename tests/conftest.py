import pytest

from workspace_indicator.monitoring import Display, Space, SpaceSnapshotSource, build_snapshot


class FakeSpaceSource(SpaceSnapshotSource):
    """Snapshot source returning whatever the test assigns to `current`."""

    def __init__(self, current=None):
        self.current = current
        self.error = None
        self.calls = 0

    def active_raw_id(self):
        if self.error is not None:
            raise self.error
        return self.current.active_raw_id if self.current else None

    def snapshot(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.current


def make_display(identifier, *spaces, active=False):
    """Build a display from (raw_id, is_fullscreen) pairs or bare raw ids."""
    parsed = []
    for space in spaces:
        if isinstance(space, tuple):
            parsed.append(Space(raw_id=space[0], is_fullscreen=space[1]))
        else:
            parsed.append(Space(raw_id=space))
    return Display(identifier=identifier, spaces=tuple(parsed), is_active_display=active)


@pytest.fixture
def fake_source():
    return FakeSpaceSource()


@pytest.fixture
def two_display_snapshot():
    def _make(active_raw_id, active_display_id="Main"):
        return build_snapshot(
            [
                make_display("Main", "s1", ("s2", True), "s3"),
                make_display("B-UUID", "s4"),
            ],
            active_raw_id,
            active_display_id,
        )
    return _make


@pytest.fixture
def display():
    return make_display
