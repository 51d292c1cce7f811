"""Segment operations

Responsibilities:
- Rename and toggle the selection of a single segment in place
- Delete a segment by removing its interior boundary markers (merge)
- Edit a segment's boundaries directly and re-derive the marker set

Rename and toggle keep every id. Delete rebuilds the partition from the
reduced marker set. A boundary edit treats the segment list as authoritative
for one cycle and regenerates markers from it afterwards.
"""

import logging
from dataclasses import replace
from typing import Tuple

from ..config import BOUNDARY_TOLERANCE
from .models import TimelineState
from .partition import default_segment_name, derive_markers, rebuild

logger = logging.getLogger(__name__)


def rename_segment(state: TimelineState, segment_id: str, name: str) -> TimelineState:
    """Rename a segment; a blank name falls back to its positional default"""
    index = state.segment_index(segment_id)
    if index == -1:
        return state

    segments = list(state.segments)
    segments[index] = replace(segments[index], name=name or default_segment_name(index))
    return replace(state, segments=tuple(segments))


def toggle_segment_selected(state: TimelineState, segment_id: str) -> TimelineState:
    """Flip whether a segment is kept on export"""
    index = state.segment_index(segment_id)
    if index == -1:
        return state

    segments = list(state.segments)
    segments[index] = replace(segments[index], selected=not segments[index].selected)
    return replace(state, segments=tuple(segments))


def delete_segment(state: TimelineState, segment_id: str) -> TimelineState:
    """
    Delete a segment, letting its neighbours absorb its span.

    The start boundary is removed unless it is 0 and the end boundary unless
    it is the duration. The last remaining segment cannot be deleted.
    """
    segment = state.get_segment(segment_id)
    if segment is None or len(state.segments) <= 1:
        return state

    boundary_times = []
    if segment.start_time > 0:
        boundary_times.append(segment.start_time)
    if segment.end_time < state.duration:
        boundary_times.append(segment.end_time)

    kept = [
        m for m in state.markers
        if not any(abs(m.time - t) < BOUNDARY_TOLERANCE for t in boundary_times)
    ]
    logger.debug(
        "Deleting segment %s removes %d marker(s)",
        segment.name, len(state.markers) - len(kept)
    )
    return rebuild(state, kept)


def update_segment_time(
    state: TimelineState,
    segment_id: str,
    start_time: float,
    end_time: float
) -> Tuple[TimelineState, bool]:
    """
    Move a segment's boundaries, dragging its neighbours' shared edges along.

    The requested range may shrink into the segment's own span but never
    reach past the current end of the previous segment or the current start
    of the next one.

    Args:
        state: Current timeline state
        segment_id: Segment to edit
        start_time: New start in seconds
        end_time: New end in seconds

    Returns:
        The new state and True, or the unchanged state and False when the
        edit is rejected.
    """
    if start_time < 0 or end_time > state.duration or start_time >= end_time:
        return state, False

    index = state.segment_index(segment_id)
    if index == -1:
        return state, False

    prev_segment = state.segments[index - 1] if index > 0 else None
    next_segment = state.segments[index + 1] if index + 1 < len(state.segments) else None

    if prev_segment is not None and start_time < prev_segment.end_time:
        return state, False
    if next_segment is not None and end_time > next_segment.start_time:
        return state, False

    segments = list(state.segments)
    segments[index] = replace(segments[index], start_time=start_time, end_time=end_time)
    if prev_segment is not None:
        segments[index - 1] = replace(prev_segment, end_time=start_time)
    if next_segment is not None:
        segments[index + 1] = replace(next_segment, start_time=end_time)

    segments = tuple(segments)
    return replace(state, markers=derive_markers(segments), segments=segments), True
