# lotkeeper/schemas/vehicle.py
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from lotkeeper.utils.durations import as_utc


class Vehicle(BaseModel):
    """A vehicle currently parked. Created on entry, removed on exit."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID
    plate: str
    entry_time: datetime

    @field_validator("plate")
    @classmethod
    def _plate_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("plate must not be empty")
        return value

    @field_validator("entry_time")
    @classmethod
    def _entry_time_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
