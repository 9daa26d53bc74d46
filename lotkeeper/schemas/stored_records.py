# lotkeeper/schemas/stored_records.py
from typing import Any

from pydantic import BaseModel, Field

CURRENT_FORMAT_VERSION = 1


class RecordEnvelope(BaseModel):
    """Top-level document written under each storage key."""

    version: int = Field(default=CURRENT_FORMAT_VERSION, ge=0)
    records: list[dict[str, Any]] = Field(default_factory=list)
