"""Partition builder

Responsibilities:
- Map a marker set and a duration onto a gapless, ordered segment list
- Project a segment list back onto its internal-boundary markers
- Provide positional default names and read-only partition queries
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_SEGMENT_NAME
from .models import Segment, SplitMarker, TimelineState, generate_id

logger = logging.getLogger(__name__)


def default_segment_name(index: int) -> str:
    """Default name for the segment at a 0-based position"""
    return DEFAULT_SEGMENT_NAME.format(index=index + 1)


def valid_markers(markers: Iterable[SplitMarker], duration: float) -> List[SplitMarker]:
    """Markers strictly inside (0, duration), sorted by time"""
    return sorted(
        (m for m in markers if 0 < m.time < duration),
        key=lambda m: m.time
    )


def build_segments(markers: Iterable[SplitMarker], duration: float) -> Tuple[Segment, ...]:
    """
    Build the segment partition for a set of split markers.

    Every segment gets a fresh id, its positional default name and is
    selected. Boundaries are not de-duplicated, so callers must keep markers
    apart before calling.

    Args:
        markers: Split markers in any order; out-of-range markers are dropped.
        duration: Total timeline length in seconds.

    Returns:
        Segments covering [0, duration], or an empty tuple when duration <= 0.
    """
    if duration <= 0:
        return ()

    time_points = [0.0] + [m.time for m in valid_markers(markers, duration)] + [duration]
    logger.debug("Building %d segments over %.3fs", len(time_points) - 1, duration)
    return tuple(
        Segment(
            id=generate_id(),
            name=default_segment_name(i),
            start_time=time_points[i],
            end_time=time_points[i + 1],
            selected=True,
        )
        for i in range(len(time_points) - 1)
    )


def derive_markers(segments: Sequence[Segment]) -> Tuple[SplitMarker, ...]:
    """One fresh marker per shared boundary between consecutive segments"""
    return tuple(SplitMarker.create(segment.end_time) for segment in segments[:-1])


def initial_state(duration: float, markers: Iterable[SplitMarker] = ()) -> TimelineState:
    """Fresh state for a duration; markers outside the timeline are discarded"""
    kept = tuple(valid_markers(markers, duration)) if duration > 0 else ()
    return TimelineState(duration=duration, markers=kept, segments=build_segments(kept, duration))


def rebuild(state: TimelineState, markers: Iterable[SplitMarker]) -> TimelineState:
    """New state with the given markers (sorted) and a freshly built partition"""
    ordered = tuple(sorted(markers, key=lambda m: m.time))
    return TimelineState(
        duration=state.duration,
        markers=ordered,
        segments=build_segments(ordered, state.duration)
    )


def selected_segments(state: TimelineState) -> List[Segment]:
    return [s for s in state.segments if s.selected]


def total_selected_duration(state: TimelineState) -> float:
    return sum(s.duration for s in selected_segments(state))


def segment_at(state: TimelineState, time: float) -> Optional[Segment]:
    """Segment containing a time; the last segment also owns the end point"""
    for index, segment in enumerate(state.segments):
        is_last = index == len(state.segments) - 1
        if segment.start_time <= time < segment.end_time or (is_last and time == segment.end_time):
            return segment
    return None
