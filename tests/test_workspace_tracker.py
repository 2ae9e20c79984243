import logging

import pytest

from workspace_indicator.exceptions import SnapshotUnavailableError, UnresolvedActiveSpaceError
from workspace_indicator.monitoring import (
    Space,
    WorkspaceChanged,
    WorkspaceTracker,
    build_snapshot,
    compute_ordinal,
    filtered_spaces,
    resolve_ordinal,
)


def _collect(tracker):
    events = []
    tracker.subscribe(events.append)
    return events


def test_fullscreen_spaces_are_skipped_across_displays(fake_source, two_display_snapshot):
    fake_source.current = two_display_snapshot("s3")
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)

    event = tracker.poll()

    assert event == WorkspaceChanged(ordinal=2, raw_id="s3")
    assert events == [event]
    assert tracker.last_seen_active_raw_id == "s3"
    assert tracker.current_ordinal == 2


def test_filtered_sequence_concatenates_displays_in_order(two_display_snapshot):
    spaces = filtered_spaces(two_display_snapshot("s1"))
    assert [space.raw_id for space in spaces] == ["s1", "s3", "s4"]


@pytest.mark.parametrize("raw_id, expected", [("s1", 1), ("s3", 2), ("s4", 3)])
def test_ordinal_is_position_in_filtered_sequence(two_display_snapshot, raw_id, expected):
    assert resolve_ordinal(two_display_snapshot(raw_id)) == expected


def test_compute_ordinal_raises_for_unknown_id():
    with pytest.raises(UnresolvedActiveSpaceError):
        compute_ordinal([Space("a"), Space("b")], "c")


def test_repeated_poll_with_same_active_space_emits_once(fake_source, two_display_snapshot):
    fake_source.current = two_display_snapshot("s1")
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)

    assert tracker.poll() is not None
    assert tracker.poll() is None
    assert len(events) == 1
    # the unchanged id short-circuits before a full snapshot is read
    assert fake_source.calls == 1


def test_each_transition_emits_in_poll_order(fake_source, two_display_snapshot):
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)

    for raw_id in ["s1", "s4", "s4", "s3", "s1"]:
        fake_source.current = two_display_snapshot(raw_id)
        tracker.poll()

    assert [event.ordinal for event in events] == [1, 3, 2, 1]


def test_fullscreen_active_space_is_unresolved(fake_source, two_display_snapshot):
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)
    fake_source.current = two_display_snapshot("s1")
    tracker.poll()

    fake_source.current = two_display_snapshot("s2")
    assert tracker.poll() is None

    assert len(events) == 1
    assert tracker.last_seen_active_raw_id == "s1"
    assert tracker.current_ordinal == 1


def test_no_matching_display_is_unresolved(fake_source, display):
    snapshot = build_snapshot(
        [display("A-UUID", "s1"), display("B-UUID", "s2")],
        "s2",
        "C-UUID",
    )
    fake_source.current = snapshot
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)

    assert tracker.poll() is None
    assert events == []
    assert tracker.last_seen_active_raw_id is None


def test_active_display_identifier_is_used_without_main(fake_source, display):
    fake_source.current = build_snapshot(
        [display("A-UUID", "s1", ("s2", True)), display("B-UUID", "s3")],
        "s3",
        "B-UUID",
    )
    tracker = WorkspaceTracker(fake_source)

    assert tracker.poll().ordinal == 2


def test_active_display_defaults_to_flagged_display(display):
    snapshot = build_snapshot(
        [display("A-UUID", "s1"), display("B-UUID", "s2", active=True)],
        "s2",
    )
    assert snapshot.active_display_id == "B-UUID"
    assert resolve_ordinal(snapshot) == 2


def test_source_failure_keeps_state_and_retries(fake_source, two_display_snapshot):
    fake_source.current = two_display_snapshot("s1")
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)
    tracker.poll()

    fake_source.error = SnapshotUnavailableError("window server busy")
    assert tracker.poll() is None
    fake_source.error = RuntimeError("unexpected")
    assert tracker.poll() is None
    assert tracker.last_seen_active_raw_id == "s1"

    fake_source.error = None
    fake_source.current = two_display_snapshot("s4")
    assert tracker.poll().ordinal == 3
    assert [event.ordinal for event in events] == [1, 3]


def test_unresolved_space_is_retried_on_next_poll(fake_source, display):
    tracker = WorkspaceTracker(fake_source)
    fake_source.current = build_snapshot([display("Main", "s1")], "s2")
    assert tracker.poll() is None

    # the space appears once the display reconfiguration settles
    fake_source.current = build_snapshot([display("Main", "s1", "s2")], "s2")
    assert tracker.poll().ordinal == 2


def test_failing_listener_does_not_block_others(fake_source, two_display_snapshot, caplog):
    fake_source.current = two_display_snapshot("s3")
    tracker = WorkspaceTracker(fake_source)

    def broken(event):
        raise RuntimeError("render failed")

    tracker.subscribe(broken)
    events = _collect(tracker)

    with caplog.at_level(logging.WARNING):
        event = tracker.poll()

    assert events == [event]
    assert tracker.last_seen_active_raw_id == "s3"
    assert "render failed" in caplog.text


def test_unsubscribe_stops_delivery(fake_source, two_display_snapshot):
    tracker = WorkspaceTracker(fake_source)
    events = []
    unsubscribe = tracker.subscribe(events.append)

    fake_source.current = two_display_snapshot("s1")
    tracker.poll()
    unsubscribe()
    fake_source.current = two_display_snapshot("s3")
    tracker.poll()

    assert [event.ordinal for event in events] == [1]
    # removing twice is harmless
    tracker.unsubscribe(events.append)


def test_reset_re_emits_current_space(fake_source, two_display_snapshot):
    fake_source.current = two_display_snapshot("s4")
    tracker = WorkspaceTracker(fake_source)
    events = _collect(tracker)
    tracker.poll()

    tracker.reset()
    tracker.poll()

    assert [event.ordinal for event in events] == [3, 3]
