"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from water_log.config import Settings
from water_log.domain.records import IntakeRecord
from water_log.services.storage import KeyValueStore, TrackerStore
from water_log.services.tracker import TrackerState


@dataclass
class FakeKeyValueStore(KeyValueStore):
    """In-memory key-value store that can be told to drop writes."""

    values: dict[str, str] = field(default_factory=dict)
    fail_writes: bool = False
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.writes.append(key)
        if self.fail_writes:
            return False
        self.values[key] = value
        return True


@dataclass
class FakeClock:
    """Clock returning a settable local time."""

    now: datetime = field(
        default_factory=lambda: datetime(2026, 10, 19, 12, 0).astimezone()
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_record(amount: float, timestamp: datetime) -> IntakeRecord:
    return IntakeRecord.create(amount, timestamp)


@pytest.fixture
def key_value_store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def tracker_store(key_value_store: FakeKeyValueStore) -> TrackerStore:
    return TrackerStore(key_value_store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(tracker_store: TrackerStore, clock: FakeClock) -> TrackerState:
    return TrackerState(store=tracker_store, clock=clock)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage_backend="file", data_path=tmp_path / "water_log.json")
