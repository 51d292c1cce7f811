"""Timeline data model

Responsibilities:
- Define split markers, segments and the immutable timeline state value
- Describe the source media file a timeline belongs to
- Generate collision-resistant identifiers for markers and segments
"""

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


def generate_id() -> str:
    """Return a fresh opaque identifier"""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class SplitMarker:
    """A split point on the timeline.

    Attributes:
        id: Opaque identifier
        time: Position in seconds, valid only strictly inside (0, duration)
    """
    id: str
    time: float

    @classmethod
    def create(cls, time: float) -> "SplitMarker":
        return cls(id=generate_id(), time=time)


@dataclass(frozen=True)
class Segment:
    """One contiguous, named, selectable interval of the partition.

    Attributes:
        id: Opaque identifier
        name: Display name, "Segment N" by default
        start_time: Inclusive start in seconds
        end_time: End in seconds, always greater than start_time
        selected: Whether the segment is kept on export
    """
    id: str
    name: str
    start_time: float
    end_time: float
    selected: bool = True

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class TimelineState:
    """Markers and segments of one timeline.

    Transitions never mutate a state; they return a new one.
    """
    duration: float = 0.0
    markers: Tuple[SplitMarker, ...] = ()
    segments: Tuple[Segment, ...] = ()

    @property
    def marker_times(self) -> Tuple[float, ...]:
        return tuple(m.time for m in self.markers)

    def segment_index(self, segment_id: str) -> int:
        """Position of a segment, or -1 when the id is unknown"""
        for index, segment in enumerate(self.segments):
            if segment.id == segment_id:
                return index
        return -1

    def get_segment(self, segment_id: str) -> Optional[Segment]:
        index = self.segment_index(segment_id)
        return self.segments[index] if index >= 0 else None


@dataclass(frozen=True)
class SourceFile:
    """Descriptor of the media file a timeline was built for.

    Persistence matches a stored session by name and size only.
    """
    name: str
    size: int
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        path = Path(path)
        return cls(name=path.name, size=path.stat().st_size, path=path)
