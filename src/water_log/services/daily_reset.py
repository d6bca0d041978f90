"""Daily reset policy for today's log."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from water_log.domain.records import IntakeRecord


@dataclass(frozen=True)
class DailyResetPolicy:
    """Decides whether the log belongs to a previous day.

    Only the first record is inspected. The log is kept most-recent-first, so
    the first record is treated as the latest one even if the collection was
    reordered by hand.
    """

    def should_reset(self, records: Sequence[IntakeRecord], now: datetime) -> bool:
        """Return True when the newest record is not from today's local date."""
        if not records:
            return False
        return _local_date(records[0].timestamp) != _local_date(now)


def _local_date(moment: datetime) -> date:
    return moment.astimezone().date()
