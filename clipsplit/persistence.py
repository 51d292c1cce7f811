"""Local persistence of the editing session

Responsibilities:
- Save the current markers and segments for one source file
- Load, match, and clear the single stored session

Only one session is kept: every save overwrites the same JSON file. Media
bytes are never stored. Storage failures are logged and never raised, so an
unavailable disk cannot break editing.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import STATE_DIR, STATE_FILE_NAME
from .timeline.models import Segment, SourceFile, SplitMarker, TimelineState
from .utils import ensure_directory

logger = logging.getLogger(__name__)


def marker_to_dict(marker: SplitMarker) -> Dict[str, Any]:
    return {"id": marker.id, "time": marker.time}


def segment_to_dict(segment: Segment) -> Dict[str, Any]:
    return {
        "id": segment.id,
        "name": segment.name,
        "startTime": segment.start_time,
        "endTime": segment.end_time,
        "selected": segment.selected,
    }


def marker_from_dict(data: Dict[str, Any]) -> SplitMarker:
    return SplitMarker(id=str(data["id"]), time=float(data["time"]))


def segment_from_dict(data: Dict[str, Any]) -> Segment:
    return Segment(
        id=str(data["id"]),
        name=str(data["name"]),
        start_time=float(data["startTime"]),
        end_time=float(data["endTime"]),
        selected=bool(data["selected"]),
    )


@dataclass
class StoredState:
    """Contents of the persisted slot"""
    file_name: str
    file_size: int
    duration: float
    markers: List[SplitMarker] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)
    timestamp: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "duration": self.duration,
            "markers": [marker_to_dict(m) for m in self.markers],
            "segments": [segment_to_dict(s) for s in self.segments],
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredState":
        return cls(
            file_name=str(data["fileName"]),
            file_size=int(data["fileSize"]),
            duration=float(data["duration"]),
            markers=[marker_from_dict(m) for m in data.get("markers", [])],
            segments=[segment_from_dict(s) for s in data.get("segments", [])],
            timestamp=int(data.get("timestamp", 0)),
        )

    def to_timeline(self) -> TimelineState:
        return TimelineState(
            duration=self.duration,
            markers=tuple(self.markers),
            segments=tuple(self.segments)
        )


class StateStorage:
    """Single-slot JSON store for the editing session."""

    def __init__(self, state_dir: Optional[Path] = None):
        self.state_dir = Path(state_dir) if state_dir is not None else STATE_DIR
        self.state_file = self.state_dir / STATE_FILE_NAME

    def save_state(
        self,
        source: SourceFile,
        duration: float,
        markers: Sequence[SplitMarker],
        segments: Sequence[Segment]
    ) -> None:
        """Overwrite the slot with the given session; failures are only logged"""
        stored = StoredState(
            file_name=source.name,
            file_size=source.size,
            duration=duration,
            markers=list(markers),
            segments=list(segments),
            timestamp=int(time.time() * 1000),
        )
        try:
            ensure_directory(self.state_dir)
            with self.state_file.open("w") as f:
                json.dump(stored.to_dict(), f, indent=2)
            logger.debug("Saved session for %s to %s", source.name, self.state_file)
        except (OSError, ValueError, TypeError) as e:
            logger.error("Failed to save state: %s", e)

    def load_state(self) -> Optional[StoredState]:
        """Read the slot; None when it is empty or unreadable"""
        if not self.state_file.exists():
            return None
        try:
            with self.state_file.open("r") as f:
                return StoredState.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.error("Failed to load state: %s", e)
            return None

    def is_file_match(self, source: SourceFile) -> bool:
        """
        Whether the stored session belongs to a file.

        Matching uses name and size only, so two different files sharing both
        are indistinguishable.
        """
        stored = self.load_state()
        if stored is None:
            return False
        return source.name == stored.file_name and source.size == stored.file_size

    def clear_state(self) -> None:
        try:
            self.state_file.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to clear state: %s", e)

    def has_stored_state(self) -> bool:
        return self.state_file.exists()

    def get_stored_file_name(self) -> Optional[str]:
        stored = self.load_state()
        return stored.file_name if stored else None
