"""Partition invariant checks

Responsibilities:
- Verify marker placement and separation
- Verify the segments form a gapless partition of [0, duration]
- Verify markers and segments agree on the internal boundaries
"""

import logging
from typing import List

from ..config import BOUNDARY_TOLERANCE, MARKER_TOLERANCE
from ..exceptions import ValidationError
from .models import TimelineState

logger = logging.getLogger(__name__)


def find_violations(state: TimelineState) -> List[str]:
    """Describe every invariant the state breaks; empty when consistent"""
    problems = []
    duration = state.duration

    if duration <= 0:
        if state.segments:
            problems.append(f"{len(state.segments)} segments on an empty timeline")
        return problems

    times = sorted(state.marker_times)
    for t in times:
        if not 0 < t < duration:
            problems.append(f"Marker at {t:.3f}s outside (0, {duration:.3f})")
    for left, right in zip(times, times[1:]):
        if right - left < MARKER_TOLERANCE:
            problems.append(f"Markers at {left:.3f}s and {right:.3f}s closer than {MARKER_TOLERANCE}s")

    segments = state.segments
    if not segments:
        problems.append("No segments for a non-empty timeline")
        return problems

    if segments[0].start_time != 0:
        problems.append(f"First segment starts at {segments[0].start_time:.3f}s")
    if segments[-1].end_time != duration:
        problems.append(f"Last segment ends at {segments[-1].end_time:.3f}s, not {duration:.3f}s")
    for segment in segments:
        if segment.end_time <= segment.start_time:
            problems.append(f"{segment.name} has no positive duration")
    for left, right in zip(segments, segments[1:]):
        if left.end_time != right.start_time:
            problems.append(f"Gap or overlap between {left.name} and {right.name}")

    if len(segments) != len(times) + 1:
        problems.append(f"{len(segments)} segments for {len(times)} markers")
    else:
        for t, segment in zip(times, segments):
            if abs(segment.end_time - t) >= BOUNDARY_TOLERANCE:
                problems.append(f"No segment boundary at marker {t:.3f}s")

    return problems


def find_damage(state: TimelineState) -> List[str]:
    """
    Describe structural damage that no transition can produce.

    Unlike find_violations this accepts states the editing operations are
    allowed to commit: markers closer than MARKER_TOLERANCE after a move, and
    a first or last segment trimmed away from 0 or from the duration.
    """
    problems = []
    duration = state.duration
    segments = state.segments

    if duration <= 0:
        if segments:
            problems.append(f"{len(segments)} segments on an empty timeline")
        return problems
    if not segments:
        problems.append("No segments for a non-empty timeline")
        return problems

    if len(segments) != len(state.markers) + 1:
        problems.append(f"{len(segments)} segments for {len(state.markers)} markers")
    for segment in segments:
        if segment.end_time <= segment.start_time:
            problems.append(f"{segment.name} has no positive duration")
        if segment.start_time < 0 or segment.end_time > duration:
            problems.append(f"{segment.name} lies outside [0, {duration:.3f}]")
    for left, right in zip(segments, segments[1:]):
        if left.end_time != right.start_time:
            problems.append(f"Gap or overlap between {left.name} and {right.name}")

    return problems


def validate_state(state: TimelineState) -> None:
    """
    Check every partition invariant.

    Raises:
        ValidationError: Listing all violations found
    """
    problems = find_violations(state)
    if problems:
        for problem in problems:
            logger.debug("Invariant violated: %s", problem)
        raise ValidationError("; ".join(problems), module="timeline")
