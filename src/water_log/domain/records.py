"""Domain models for logged water intake."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from water_log.domain.errors import InvalidOperationError

DEFAULT_GOAL_ML = 2000.0
QUICK_ADD_AMOUNTS_ML = (100.0, 250.0, 500.0)
SUGGESTED_GOAL_RANGE_ML = (500.0, 5000.0)
GOAL_STEP_ML = 100.0


@dataclass(frozen=True)
class IntakeRecord:
    """A single drink logged by the user."""

    amount: float
    timestamp: datetime
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if not is_valid_amount(self.amount):
            raise InvalidOperationError(
                f"Intake amount must be a positive number of ml, got {self.amount!r}"
            )
        object.__setattr__(self, "amount", float(self.amount))

    @classmethod
    def create(cls, amount: float, timestamp: datetime) -> "IntakeRecord":
        """Build a record with a freshly generated id."""
        return cls(amount=amount, timestamp=timestamp)


def is_valid_amount(amount: object) -> bool:
    """Return True for finite, strictly positive numbers."""
    if isinstance(amount, bool) or not isinstance(amount, int | float):
        return False
    return math.isfinite(amount) and amount > 0
