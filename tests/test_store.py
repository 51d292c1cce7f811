"""Tests for the timeline store."""
import json

from clipsplit.events import EventType
from clipsplit.persistence import StateStorage
from clipsplit.store import TimelineStore
from clipsplit.timeline import SourceFile


def _bounds(store):
    return [(s.start_time, s.end_time) for s in store.segments]


def test_set_duration_creates_single_segment(store):
    assert _bounds(store) == [(0.0, 100.0)]
    assert store.duration == 100.0


def test_transitions_apply_in_order(store):
    assert store.add_marker(30.0)
    assert store.add_marker(70.0)
    assert not store.add_marker(30.05)
    assert _bounds(store) == [(0.0, 30.0), (30.0, 70.0), (70.0, 100.0)]

    assert store.delete_marker(store.markers[0].id)
    assert _bounds(store) == [(0.0, 70.0), (70.0, 100.0)]

    assert store.delete_segment(store.segments[0].id)
    assert _bounds(store) == [(0.0, 100.0)]
    assert not store.delete_segment(store.segments[0].id)


def test_update_segment_time_conflict_leaves_state(store):
    store.add_marker(30.0)
    store.add_marker(70.0)
    before = store.state
    assert store.update_segment_time(store.segments[1].id, 20.0, 70.0) is False
    assert store.state is before


def test_every_commit_is_saved(store, storage):
    store.add_marker(25.0)
    store.rename_segment(store.segments[0].id, "Intro")
    with storage.state_file.open() as f:
        data = json.load(f)
    assert data["fileName"] == "holiday.mp4"
    assert data["fileSize"] == 123456
    assert data["duration"] == 100.0
    assert [m["time"] for m in data["markers"]] == [25.0]
    assert data["segments"][0]["name"] == "Intro"
    assert data["segments"][1]["startTime"] == 25.0


def test_rejected_transition_is_not_saved(store, mocker):
    save = mocker.spy(store.storage, "save_state")
    store.add_marker(0.0)
    store.toggle_segment_selected("missing")
    save.assert_not_called()


def test_commit_event_carries_state(store):
    seen = []
    store.events.on(EventType.STATE_COMMITTED, seen.append)
    store.toggle_segment_selected(store.segments[0].id)
    assert len(seen) == 1
    assert seen[0].data["state"] is store.state
    assert seen[0].data["state"].segments[0].selected is False


def test_persistence_failure_does_not_block_edits(store, mocker):
    mocker.patch.object(store.storage, "save_state", side_effect=RuntimeError("disk gone"))
    assert store.add_marker(50.0)
    assert len(store.segments) == 2


def test_restore_matching_source(storage, source):
    first = TimelineStore(storage=storage)
    first.set_source(source)
    first.set_duration(100.0)
    first.add_marker(40.0)
    first.rename_segment(first.segments[1].id, "Second half")

    second = TimelineStore(storage=storage)
    second.set_source(source)
    assert second.restore() is True
    assert second.state == first.state


def test_restore_ignores_other_file(store, storage):
    store.add_marker(40.0)
    other = TimelineStore(storage=storage)
    other.set_source(SourceFile(name="holiday.mp4", size=1))
    assert other.restore() is False
    assert other.segments == ()


def test_restore_rebuilds_damaged_session(store, storage):
    store.add_marker(40.0)
    with storage.state_file.open() as f:
        data = json.load(f)
    data["segments"][0]["endTime"] = 10.0
    with storage.state_file.open("w") as f:
        json.dump(data, f)

    other = TimelineStore(storage=storage)
    other.set_source(store.source)
    assert other.restore() is True
    assert _bounds(other) == [(0.0, 40.0), (40.0, 100.0)]


def test_restore_without_storage(source):
    store = TimelineStore()
    store.set_source(source)
    assert store.restore() is False


def test_set_source_resets_timeline(store, source):
    store.add_marker(40.0)
    store.set_source(source)
    assert store.segments == ()
    assert store.markers == ()


def test_clear_removes_saved_session(store, storage):
    store.add_marker(40.0)
    assert storage.has_stored_state()
    store.clear()
    assert not storage.has_stored_state()
    assert store.source is None
    assert store.duration == 0.0


def test_set_exporting(store):
    store.set_exporting(True, 42.0)
    assert store.exporting and store.export_progress == 42.0
    store.set_exporting(False)
    assert not store.exporting and store.export_progress == 0.0


def test_store_without_source_does_not_save(tmp_path):
    storage = StateStorage(tmp_path)
    store = TimelineStore(storage=storage)
    store.set_duration(10.0)
    assert not storage.has_stored_state()


def _reopen(store, storage):
    other = TimelineStore(storage=storage)
    other.set_source(store.source)
    assert other.restore() is True
    return other


def test_restore_keeps_close_markers_and_names(store, storage):
    store.add_marker(30.0)
    store.add_marker(70.0)
    assert store.update_marker(store.markers[1].id, 30.05)
    store.rename_segment(store.segments[0].id, "Intro")
    store.toggle_segment_selected(store.segments[2].id)

    other = _reopen(store, storage)
    assert other.state == store.state
    assert other.segments[0].name == "Intro"
    assert other.segments[2].selected is False


def test_restore_keeps_trimmed_edge_segment(store, storage):
    store.add_marker(50.0)
    assert store.update_segment_time(store.segments[0].id, 5.0, 50.0)

    other = _reopen(store, storage)
    assert _bounds(other) == [(5.0, 50.0), (50.0, 100.0)]
    assert other.state == store.state
