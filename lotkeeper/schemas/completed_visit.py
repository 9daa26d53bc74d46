# lotkeeper/schemas/completed_visit.py
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from lotkeeper.schemas.vehicle import Vehicle
from lotkeeper.utils.durations import as_utc, elapsed_seconds


class CompletedVisit(BaseModel):
    """Archived stay. Shares its id with the Vehicle it was created from."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID
    plate: str
    entry_time: datetime
    exit_time: datetime
    fee: Decimal = Field(ge=0)

    @field_validator("entry_time", "exit_time")
    @classmethod
    def _times_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _exit_not_before_entry(self):
        if self.exit_time < self.entry_time:
            raise ValueError(f"exit time {self.exit_time} precedes entry time {self.entry_time}")
        return self

    @field_serializer("fee", when_used="json")
    def _fee_as_number(self, fee: Decimal) -> float:
        return float(fee)

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle, exit_time: datetime, fee: Decimal) -> "CompletedVisit":
        return cls(
            id=vehicle.id,
            plate=vehicle.plate,
            entry_time=vehicle.entry_time,
            exit_time=exit_time,
            fee=fee,
        )

    @property
    def stay_seconds(self) -> float:
        return elapsed_seconds(self.entry_time, self.exit_time)


class DailyStats(BaseModel):
    date: date
    total_visits: int
    total_fees: Decimal
    avg_parking_minutes: float
