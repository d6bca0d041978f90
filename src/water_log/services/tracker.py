"""Tracker state for today's water intake."""

import logging
import math
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from water_log.domain.errors import InvalidOperationError
from water_log.domain.progress import ProgressSnapshot, build_snapshot, compute_progress
from water_log.domain.records import DEFAULT_GOAL_ML, IntakeRecord, is_valid_amount
from water_log.services.daily_reset import DailyResetPolicy
from water_log.services.storage import TrackerStore

_logger = logging.getLogger(__name__)

Listener = Callable[["TrackerState"], None]


def local_now() -> datetime:
    """Return the current moment as an aware datetime in local time."""
    return datetime.now().astimezone()


@dataclass(eq=False)
class TrackerState:
    """Holds the goal and today's records and persists every change.

    Records are kept most-recent-first. Construction loads the persisted goal
    and records and then applies the daily reset policy. Listeners registered
    with ``subscribe`` are called synchronously after each successful mutation.
    """

    store: TrackerStore
    clock: Callable[[], datetime] = local_now
    reset_policy: DailyResetPolicy = field(default_factory=DailyResetPolicy)
    default_goal: float = DEFAULT_GOAL_ML
    _goal: float = field(init=False)
    _records: list[IntakeRecord] = field(init=False)
    _listeners: list[Listener] = field(init=False, default_factory=list)
    _lock: threading.RLock = field(init=False, default_factory=threading.RLock)

    def __post_init__(self) -> None:
        self._goal = self.store.load_goal(self.default_goal)
        self._records = self.store.load_records()
        _logger.info(
            "Loaded tracker state: goal=%s records=%s", self._goal, len(self._records)
        )
        self.check_daily_reset()

    @property
    def goal(self) -> float:
        return self._goal

    @property
    def records(self) -> tuple[IntakeRecord, ...]:
        """Today's records, most recent first."""
        return tuple(self._records)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def add_intake(self, amount: float) -> IntakeRecord:
        """Log a drink of ``amount`` ml at the current time."""
        if not is_valid_amount(amount):
            raise InvalidOperationError(
                f"Intake amount must be a positive number of ml, got {amount!r}"
            )
        with self._lock:
            record = IntakeRecord.create(amount, self.clock())
            self._records.insert(0, record)
            self.store.save_records(self._records)
        self._notify()
        return record

    def delete_records(self, positions: Iterable[int]) -> None:
        """Remove the records at the given positions of the current order.

        All positions are validated first; a single invalid one rejects the
        whole call and leaves the log untouched.
        """
        with self._lock:
            try:
                targets = set(positions)
            except TypeError as exc:
                raise InvalidOperationError(
                    f"Positions must be an iterable of integers, got {positions!r}"
                ) from exc
            if not targets:
                return
            invalid = sorted(
                (p for p in targets if not _is_valid_position(p, len(self._records))),
                key=str,
            )
            if invalid:
                raise InvalidOperationError(
                    f"Cannot delete positions {invalid}: log has "
                    f"{len(self._records)} records"
                )
            self._records = [
                record
                for index, record in enumerate(self._records)
                if index not in targets
            ]
            self.store.save_records(self._records)
        self._notify()

    def set_goal(self, value: float) -> None:
        """Replace the daily goal. No range clamping is applied."""
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise InvalidOperationError(f"Goal must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidOperationError(f"Goal must be finite, got {value!r}")
        with self._lock:
            self._goal = float(value)
            self.store.save_goal(self._goal)
        self._notify()

    def clear_today(self) -> None:
        """Remove every record of today's log."""
        with self._lock:
            self._records = []
            self.store.save_records(self._records)
        self._notify()

    def check_daily_reset(self) -> bool:
        """Clear the log if its newest record is from a previous day."""
        with self._lock:
            if not self.reset_policy.should_reset(self._records, self.clock()):
                return False
            _logger.info(
                "Daily reset: clearing %s records from %s",
                len(self._records),
                self._records[0].timestamp.astimezone().date().isoformat(),
            )
            self._records = []
            self.store.save_records(self._records)
        self._notify()
        return True

    def total_intake(self) -> float:
        """Return the sum of today's logged amounts in ml."""
        with self._lock:
            return sum((record.amount for record in self._records), 0.0)

    def progress(self) -> float:
        """Return the share of the goal reached, between 0 and 1."""
        with self._lock:
            return compute_progress(self.total_intake(), self._goal)

    def snapshot(self) -> ProgressSnapshot:
        """Return total, goal and progress read at the same moment."""
        with self._lock:
            return build_snapshot(self.total_intake(), self._goal)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(self)
            except Exception:
                _logger.exception("Tracker listener %r failed", listener)


def _is_valid_position(position: object, size: int) -> bool:
    if isinstance(position, bool) or not isinstance(position, int):
        return False
    return 0 <= position < size
