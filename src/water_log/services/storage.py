"""Persistence for the goal and today's records."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from water_log.domain.records import IntakeRecord
from water_log.schemas import GOAL_ADAPTER, RECORD_LIST_ADAPTER, IntakeRecordPayload

GOAL_KEY = "targetGoal"
RECORDS_KEY = "todayIntakeRecords"

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable key-value storage for serialized values."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> bool:
        """Store a value and return True when the write succeeded."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Non-durable store that keeps values for the process lifetime."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True


@dataclass
class TrackerStore:
    """Encodes tracker state and reports persistence failures."""

    store: KeyValueStore

    def load_goal(self, default: float) -> float:
        """Return the stored goal or the default when missing or unreadable."""
        raw = self.store.get(GOAL_KEY)
        if raw is None:
            return default
        try:
            goal = GOAL_ADAPTER.validate_json(raw)
        except ValidationError:
            _logger.exception("Failed to decode stored goal, using default")
            return default
        if not math.isfinite(goal):
            _logger.error("Stored goal is not finite, using default: %r", raw)
            return default
        return goal

    def load_records(self) -> list[IntakeRecord]:
        """Return stored records or an empty list when missing or unreadable."""
        raw = self.store.get(RECORDS_KEY)
        if raw is None:
            return []
        try:
            payloads = RECORD_LIST_ADAPTER.validate_json(raw)
        except ValidationError:
            _logger.exception("Failed to decode stored intake records, starting empty")
            return []
        return [payload.to_record() for payload in payloads]

    def save_goal(self, goal: float) -> bool:
        """Persist the goal; failures are logged and reported as False."""
        try:
            encoded = GOAL_ADAPTER.dump_json(goal).decode()
        except ValueError:
            _logger.exception("Failed to encode goal %r", goal)
            return False
        return self._write(GOAL_KEY, encoded)

    def save_records(self, records: Sequence[IntakeRecord]) -> bool:
        """Persist the full record list; failures are logged and reported as False."""
        try:
            payloads = [IntakeRecordPayload.from_record(record) for record in records]
            encoded = RECORD_LIST_ADAPTER.dump_json(payloads).decode()
        except ValueError:
            _logger.exception("Failed to encode %s intake records", len(records))
            return False
        return self._write(RECORDS_KEY, encoded)

    def _write(self, key: str, value: str) -> bool:
        if self.store.set(key, value):
            return True
        _logger.error("Write to %s was dropped, change is kept in memory only", key)
        return False
