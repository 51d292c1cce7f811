"""Shared fixtures for clipsplit tests."""
from pathlib import Path

import pytest

from clipsplit.persistence import StateStorage
from clipsplit.store import TimelineStore
from clipsplit.timeline import SourceFile, SplitMarker, initial_state


@pytest.fixture
def three_segments():
    """duration=100 split at 30 and 70."""
    return initial_state(100.0, [SplitMarker.create(30.0), SplitMarker.create(70.0)])


@pytest.fixture
def storage(tmp_path: Path) -> StateStorage:
    return StateStorage(tmp_path / "state")


@pytest.fixture
def source() -> SourceFile:
    return SourceFile(name="holiday.mp4", size=123456, path=Path("/tmp/holiday.mp4"))


@pytest.fixture
def store(storage: StateStorage, source: SourceFile) -> TimelineStore:
    store = TimelineStore(storage=storage)
    store.set_source(source)
    store.set_duration(100.0)
    return store
