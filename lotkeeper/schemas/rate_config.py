# lotkeeper/schemas/rate_config.py
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from lotkeeper.config import settings


class RateConfig(BaseModel):
    """Two-tier hourly tariff. Applied at checkout, never retroactively."""

    model_config = ConfigDict(frozen=True)

    first_hour_rate: Decimal = Field(ge=0)
    extra_hour_rate: Decimal = Field(ge=0)

    @classmethod
    def from_settings(cls) -> "RateConfig":
        return cls(
            first_hour_rate=settings.FIRST_HOUR_RATE,
            extra_hour_rate=settings.EXTRA_HOUR_RATE,
        )
