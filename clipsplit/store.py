"""Timeline state store

Responsibilities:
- Hold the current timeline state and the source file it belongs to
- Apply marker and segment operations as atomic transitions, in order
- Announce every commit so listeners (persistence) can react
- Restore a stored session for a matching source file

The store is the only place that replaces the current state. Transitions
are pure functions from the timeline package; the store commits their
result and emits STATE_COMMITTED, to which the persistence adapter is
attached. Listener failures are logged and never reach the caller.
"""

import logging
from typing import Optional

from .events import EventEmitter, EventType
from .persistence import StateStorage, StoredState
from .timeline import markers as marker_ops
from .timeline import segments as segment_ops
from .timeline.models import SourceFile, TimelineState
from .timeline.partition import initial_state
from .timeline.validation import find_damage

logger = logging.getLogger(__name__)

class TimelineStore:
    """Owns one timeline and its transitions."""

    def __init__(self, storage: Optional[StateStorage] = None, events: Optional[EventEmitter] = None):
        """Initialize an empty store.

        Args:
            storage: Persistence adapter notified after every commit, if any
            events: Event emitter to publish on; a private one by default
        """
        self.events = events or EventEmitter()
        self.storage = storage
        self.source: Optional[SourceFile] = None
        self.state = TimelineState()
        self.exporting = False
        self.export_progress = 0.0
        if storage is not None:
            self.events.on(EventType.STATE_COMMITTED, self._persist)
            self.events.on(EventType.STATE_CLEARED, self._clear_persisted)

    @property
    def duration(self) -> float:
        return self.state.duration

    @property
    def markers(self):
        return self.state.markers

    @property
    def segments(self):
        return self.state.segments

    def _commit(self, new_state: TimelineState) -> None:
        self.state = new_state
        self.events.emit(
            EventType.STATE_COMMITTED,
            {"source": self.source, "state": new_state},
            source="store"
        )

    def _apply(self, new_state: TimelineState) -> bool:
        """Commit a transition result unless it was rejected"""
        if new_state is self.state:
            return False
        self._commit(new_state)
        return True

    def _persist(self, event) -> None:
        source = event.data["source"]
        state = event.data["state"]
        if source is None:
            return
        self.storage.save_state(source, state.duration, state.markers, state.segments)

    def _clear_persisted(self, event) -> None:
        self.storage.clear_state()

    def set_source(self, source: SourceFile) -> None:
        """Start a new timeline for a source; its duration is not known yet"""
        self.source = source
        self.state = TimelineState()
        logger.info("Loaded source %s (%d bytes)", source.name, source.size)
        self.events.emit(EventType.SOURCE_CHANGED, {"source": source}, source="store")

    def set_duration(self, duration: float) -> None:
        """Set the timeline length and rebuild the partition from the current markers"""
        self._commit(initial_state(duration, self.state.markers))

    def clear(self) -> None:
        """Discard the source, the timeline and the stored session"""
        self.source = None
        self.state = TimelineState()
        self.events.emit(EventType.STATE_CLEARED, {}, source="store")

    def restore(self) -> bool:
        """
        Load the stored session if it belongs to the current source.

        The session is restored exactly as saved. Only a structurally damaged
        session (segment count disagreeing with the markers, empty or
        overlapping segments) is rebuilt from its markers, losing segment
        names and selection.

        Returns:
            True when a session was restored.
        """
        if self.storage is None or self.source is None:
            return False
        if not self.storage.is_file_match(self.source):
            return False
        stored: Optional[StoredState] = self.storage.load_state()
        if stored is None:
            return False

        state = stored.to_timeline()
        problems = find_damage(state)
        if problems:
            logger.warning(
                "Stored session for %s is damaged (%s); rebuilding from markers",
                stored.file_name, "; ".join(problems)
            )
            state = initial_state(stored.duration, stored.markers)
        self.state = state
        logger.info(
            "Restored %d segments for %s", len(state.segments), stored.file_name
        )
        return True

    def add_marker(self, time: float) -> bool:
        return self._apply(marker_ops.add_marker(self.state, time))

    def update_marker(self, marker_id: str, time: float) -> bool:
        return self._apply(marker_ops.update_marker(self.state, marker_id, time))

    def delete_marker(self, marker_id: str) -> bool:
        return self._apply(marker_ops.delete_marker(self.state, marker_id))

    def rename_segment(self, segment_id: str, name: str) -> bool:
        return self._apply(segment_ops.rename_segment(self.state, segment_id, name))

    def toggle_segment_selected(self, segment_id: str) -> bool:
        return self._apply(segment_ops.toggle_segment_selected(self.state, segment_id))

    def delete_segment(self, segment_id: str) -> bool:
        return self._apply(segment_ops.delete_segment(self.state, segment_id))

    def update_segment_time(self, segment_id: str, start_time: float, end_time: float) -> bool:
        new_state, ok = segment_ops.update_segment_time(self.state, segment_id, start_time, end_time)
        if ok:
            self._commit(new_state)
        return ok

    def set_exporting(self, exporting: bool, progress: float = 0.0) -> None:
        self.exporting = exporting
        self.export_progress = progress
