"""Exception hierarchy for lotkeeper."""

from __future__ import annotations


class ParkingError(Exception):
    """Base exception for all lotkeeper errors."""


class InvalidPlateError(ParkingError, ValueError):
    """Plate is empty once surrounding whitespace is trimmed."""


class VehicleNotFoundError(ParkingError, KeyError):
    """No active vehicle carries the requested id."""

    def __init__(self, vehicle_id) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(f"No active vehicle with id {vehicle_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvalidDurationError(ParkingError, ValueError):
    """A stay ended before it started."""

    def __init__(self, seconds) -> None:
        self.seconds = seconds
        super().__init__(f"Stay duration cannot be negative: {seconds}s")


class InvalidRateError(ParkingError, ValueError):
    """Rate is negative or not a number."""


class PersistenceFailure(ParkingError):
    """Encoding, decoding, or storage read/write failed."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)
