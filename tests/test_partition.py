"""Tests for building segment partitions from markers."""
import random

import pytest

from clipsplit.timeline import (
    SplitMarker, build_segments, default_segment_name, derive_markers,
    find_violations, initial_state, segment_at, selected_segments,
    total_selected_duration
)


def _bounds(segments):
    return [(s.start_time, s.end_time) for s in segments]


def test_example_split_at_30_and_70():
    segments = build_segments([SplitMarker.create(70.0), SplitMarker.create(30.0)], 100.0)
    assert _bounds(segments) == [(0.0, 30.0), (30.0, 70.0), (70.0, 100.0)]
    assert [s.name for s in segments] == ["Segment 1", "Segment 2", "Segment 3"]
    assert all(s.selected for s in segments)


def test_no_markers_yields_single_segment():
    segments = build_segments([], 42.5)
    assert _bounds(segments) == [(0.0, 42.5)]


@pytest.mark.parametrize("duration", [0, -1.0])
def test_non_positive_duration_yields_nothing(duration):
    assert build_segments([SplitMarker.create(1.0)], duration) == ()


def test_out_of_range_markers_are_dropped():
    markers = [SplitMarker.create(t) for t in (0.0, 10.0, 100.0, 150.0, -3.0)]
    segments = build_segments(markers, 100.0)
    assert _bounds(segments) == [(0.0, 10.0), (10.0, 100.0)]


def test_segment_ids_are_fresh_on_every_build():
    markers = [SplitMarker.create(50.0)]
    first = {s.id for s in build_segments(markers, 100.0)}
    second = {s.id for s in build_segments(markers, 100.0)}
    assert len(first) == 2
    assert first.isdisjoint(second)


def test_total_coverage_and_count_law():
    rng = random.Random(7)
    for _ in range(50):
        duration = rng.uniform(1.0, 500.0)
        times = sorted({round(rng.uniform(0.2, duration - 0.2), 1) for _ in range(rng.randint(0, 12))})
        markers = [SplitMarker.create(t) for t in times if 0 < t < duration]
        segments = build_segments(markers, duration)

        assert len(segments) == len(markers) + 1
        assert segments[0].start_time == 0
        assert segments[-1].end_time == duration
        for left, right in zip(segments, segments[1:]):
            assert left.end_time == right.start_time
        assert all(s.end_time > s.start_time for s in segments)


def test_round_trip_reproduces_boundaries(three_segments):
    markers = derive_markers(three_segments.segments)
    assert [m.time for m in markers] == [30.0, 70.0]
    rebuilt = build_segments(markers, three_segments.duration)
    assert _bounds(rebuilt) == _bounds(three_segments.segments)


def test_derive_markers_single_segment_has_none():
    assert derive_markers(build_segments([], 10.0)) == ()


def test_default_segment_name_is_one_based():
    assert default_segment_name(0) == "Segment 1"
    assert default_segment_name(9) == "Segment 10"


def test_initial_state_is_consistent(three_segments):
    assert find_violations(three_segments) == []
    assert three_segments.marker_times == (30.0, 70.0)


def test_segment_at(three_segments):
    assert segment_at(three_segments, 0.0).name == "Segment 1"
    assert segment_at(three_segments, 30.0).name == "Segment 2"
    assert segment_at(three_segments, 100.0).name == "Segment 3"
    assert segment_at(three_segments, 100.5) is None


def test_selected_duration(three_segments):
    assert total_selected_duration(three_segments) == pytest.approx(100.0)
    assert len(selected_segments(three_segments)) == 3
