"""Pydantic models for the persisted record exchange format."""

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field, TypeAdapter

from water_log.domain.records import IntakeRecord


class IntakeRecordPayload(BaseModel):
    """Stored representation of a single intake record."""

    id: UUID
    amount: float = Field(gt=0, allow_inf_nan=False)
    date: AwareDatetime

    @classmethod
    def from_record(cls, record: IntakeRecord) -> "IntakeRecordPayload":
        return cls(id=record.id, amount=record.amount, date=_as_aware(record.timestamp))

    def to_record(self) -> IntakeRecord:
        return IntakeRecord(id=self.id, amount=self.amount, timestamp=self.date)


RECORD_LIST_ADAPTER = TypeAdapter(list[IntakeRecordPayload])
GOAL_ADAPTER = TypeAdapter(float)


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.astimezone()
    return value
