"""Marker operations

Each operation takes the current state and returns the next one. A rejected
edit returns the state it was given, unchanged.
"""

import logging

from ..config import MARKER_TOLERANCE
from .models import SplitMarker, TimelineState
from .partition import rebuild

logger = logging.getLogger(__name__)


def _inside_timeline(state: TimelineState, time: float) -> bool:
    return 0 < time < state.duration


def add_marker(state: TimelineState, time: float) -> TimelineState:
    """
    Insert a split marker and rebuild the partition.

    Rejected when the time is not strictly inside the timeline or an
    existing marker lies within MARKER_TOLERANCE of it.
    """
    if not _inside_timeline(state, time):
        logger.debug("Rejected marker at %.3fs: outside (0, %.3f)", time, state.duration)
        return state
    if any(abs(m.time - time) < MARKER_TOLERANCE for m in state.markers):
        logger.debug("Rejected marker at %.3fs: too close to an existing marker", time)
        return state

    return rebuild(state, state.markers + (SplitMarker.create(time),))


def update_marker(state: TimelineState, marker_id: str, time: float) -> TimelineState:
    """
    Move a marker and rebuild the partition.

    Only the timeline range is checked. Neighbouring markers are not, so a
    move may land within MARKER_TOLERANCE of another marker.
    """
    if not _inside_timeline(state, time):
        logger.debug("Rejected move of marker %s to %.3fs", marker_id, time)
        return state

    moved = tuple(
        SplitMarker(id=m.id, time=time) if m.id == marker_id else m
        for m in state.markers
    )
    return rebuild(state, moved)


def delete_marker(state: TimelineState, marker_id: str) -> TimelineState:
    """Remove a marker, merging the two segments it separated"""
    return rebuild(state, (m for m in state.markers if m.id != marker_id))
