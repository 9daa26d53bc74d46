# lotkeeper/services/vehicle_registry.py
"""
Active vehicles, in entry order (which is also display order).
Ids come from id_factory (uuid4 by default) and are never handed out twice
within a registry, including ids restored from storage or reserved by the
archive.
"""

from datetime import datetime
from typing import Callable, Iterable, Optional
from uuid import UUID, uuid4

from lotkeeper.exceptions import InvalidPlateError, ParkingError, VehicleNotFoundError
from lotkeeper.schemas.vehicle import Vehicle
from lotkeeper.utils.durations import utcnow
from lotkeeper.utils.logger import get_logger

logger = get_logger(__name__)

MAX_ID_ATTEMPTS = 10


class VehicleRegistry:
    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Callable[[], UUID] = uuid4,
    ):
        self._clock = clock or utcnow
        self._id_factory = id_factory
        self._vehicles: list[Vehicle] = []
        self._issued_ids: set[UUID] = set()

    def add(self, plate: str) -> Vehicle:
        trimmed = (plate or "").strip()
        if not trimmed:
            raise InvalidPlateError("Plate must not be empty")

        vehicle = Vehicle(id=self._new_id(), plate=trimmed, entry_time=self._clock())
        self._vehicles.append(vehicle)
        return vehicle

    def get(self, vehicle_id: UUID) -> Vehicle:
        for vehicle in self._vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        raise VehicleNotFoundError(vehicle_id)

    def remove(self, vehicle_id: UUID) -> Vehicle:
        vehicle = self.get(vehicle_id)
        self._vehicles.remove(vehicle)
        return vehicle

    def list(self) -> list[Vehicle]:
        return list(self._vehicles)

    def restore(self, vehicles: Iterable[Vehicle]) -> None:
        """Load persisted vehicles, keeping their order and skipping duplicate ids."""
        for vehicle in vehicles:
            if vehicle.id in self._issued_ids:
                logger.warning(f"[Registry] Duplicate vehicle id {vehicle.id} ({vehicle.plate}) skipped on restore")
                continue
            self._issued_ids.add(vehicle.id)
            self._vehicles.append(vehicle)

    def reserve(self, ids: Iterable[UUID]) -> None:
        """Mark ids used elsewhere (e.g. archived visits) so they are never issued."""
        self._issued_ids.update(ids)

    def _new_id(self) -> UUID:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
        raise ParkingError(f"Could not generate an unused vehicle id after {MAX_ID_ATTEMPTS} attempts")

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, vehicle_id) -> bool:
        return any(v.id == vehicle_id for v in self._vehicles)
