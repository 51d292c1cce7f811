"""Marker/segment interval model

The marker set and the segment partition of one timeline, plus the pure
transitions that keep them consistent.
"""

from .models import Segment, SourceFile, SplitMarker, TimelineState, generate_id
from .partition import (
    build_segments, default_segment_name, derive_markers, initial_state,
    segment_at, selected_segments, total_selected_duration, valid_markers
)
from .markers import add_marker, delete_marker, update_marker
from .segments import (
    delete_segment, rename_segment, toggle_segment_selected, update_segment_time
)
from .validation import find_damage, find_violations, validate_state

__all__ = [
    'Segment',
    'SourceFile',
    'SplitMarker',
    'TimelineState',
    'generate_id',
    'build_segments',
    'default_segment_name',
    'derive_markers',
    'initial_state',
    'segment_at',
    'selected_segments',
    'total_selected_duration',
    'valid_markers',
    'add_marker',
    'delete_marker',
    'update_marker',
    'delete_segment',
    'rename_segment',
    'toggle_segment_selected',
    'update_segment_time',
    'find_damage',
    'find_violations',
    'validate_state',
]
