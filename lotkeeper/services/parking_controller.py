# lotkeeper/services/parking_controller.py
"""
Owns the session state (active vehicles, visit history, current rates)
and is the only thing the presentation layer talks to.

How it works:
  - add_vehicle  → Registry.add → save active vehicles → notify "vehicle_added"
  - checkout     → fee from current rates → Registry.remove + Archive.record
                   → save visits, then active vehicles → notify "vehicle_checked_out"
  - set_rates    → replaces the tariff for future checkouts only
  - Storage failures never raise: state stays in memory for the session,
    last_warning is set and listeners get "persistence_failed".
  - A key that could not be read at startup is never written this session.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional
from uuid import UUID, uuid4

from pydantic import ValidationError

from lotkeeper.config import settings
from lotkeeper.exceptions import InvalidPlateError, InvalidRateError, PersistenceFailure
from lotkeeper.schemas.completed_visit import CompletedVisit, DailyStats
from lotkeeper.schemas.rate_config import RateConfig
from lotkeeper.schemas.vehicle import Vehicle
from lotkeeper.services.elapsed_formatter import format_elapsed
from lotkeeper.services.fee_calculator import compute_fee
from lotkeeper.services.repository import ParkingRepository
from lotkeeper.services.vehicle_registry import VehicleRegistry
from lotkeeper.services.visit_archive import VisitArchive
from lotkeeper.utils.durations import elapsed_seconds, utcnow
from lotkeeper.utils.logger import get_logger

logger = get_logger(__name__)

Listener = Callable[[str, Any], None]


class ParkingController:
    def __init__(
        self,
        repository: ParkingRepository,
        rates: Optional[RateConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Callable[[], UUID] = uuid4,
        vehicles_key: Optional[str] = None,
        visits_key: Optional[str] = None,
    ):
        self._repository = repository
        self._clock = clock or utcnow
        self._rates = rates or RateConfig.from_settings()
        self._vehicles_key = vehicles_key or settings.ACTIVE_VEHICLES_KEY
        self._visits_key = visits_key or settings.COMPLETED_VISITS_KEY
        self._listeners: list[Listener] = []

        self.registry = VehicleRegistry(clock=self._clock, id_factory=id_factory)
        self.archive = VisitArchive()
        self.last_warning: Optional[str] = None
        self._unwritable_keys: set[str] = set()

        self._load()

    # ── Mutations ─────────────────────────────────────────────────────────

    def add_vehicle(self, plate: str) -> Optional[Vehicle]:
        """Park a vehicle. Blank plates are ignored and return None."""
        try:
            vehicle = self.registry.add(plate)
        except InvalidPlateError:
            logger.warning(f"[Entry] Blank plate {plate!r} ignored")
            return None

        logger.info(f"[Entry] Plate={vehicle.plate} | Id={vehicle.id} | At={vehicle.entry_time:%Y-%m-%d %H:%M:%S}")
        self._save(self._vehicles_key, self.registry.list())
        self._notify("vehicle_added", vehicle)
        return vehicle

    def checkout(self, vehicle_id: UUID) -> Decimal:
        """
        Check a vehicle out and return its fee.
        Raises VehicleNotFoundError / InvalidDurationError before any state
        changes, so a failed checkout never loses the vehicle.
        """
        vehicle = self.registry.get(vehicle_id)
        exit_time = self._clock()
        fee = compute_fee(elapsed_seconds(vehicle.entry_time, exit_time), self._rates)

        self.registry.remove(vehicle_id)
        visit = self.archive.record(vehicle, exit_time, fee)

        logger.info(f"[Exit] Plate={visit.plate} | Stayed {int(visit.stay_seconds) // 60} min | Fee={fee}")
        # Visits before vehicles, so a failed write never leaves the vehicle
        # stored in neither key. Stored in both, _load treats it as archived.
        if self._save(self._visits_key, self.archive.list()):
            self._save(self._vehicles_key, self.registry.list())
        self._notify("vehicle_checked_out", visit)
        return fee

    def set_rates(self, first_hour_rate=None, extra_hour_rate=None) -> RateConfig:
        """Replace one or both rates. Applies to checkouts from now on."""
        changes = {}
        if first_hour_rate is not None:
            changes["first_hour_rate"] = first_hour_rate
        if extra_hour_rate is not None:
            changes["extra_hour_rate"] = extra_hour_rate
        if not changes:
            return self._rates

        try:
            rates = RateConfig.model_validate({**self._rates.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidRateError(f"Invalid rate {changes}: {e.errors()[0]['msg']}") from e

        self._rates = rates
        logger.info(f"[Rates] First hour={rates.first_hour_rate} | Extra hour={rates.extra_hour_rate}")
        self._notify("rates_changed", rates)
        return rates

    # ── Read-only views ───────────────────────────────────────────────────

    @property
    def rates(self) -> RateConfig:
        return self._rates

    def active_vehicles(self) -> list[Vehicle]:
        return self.registry.list()

    def completed_visits(self) -> list[CompletedVisit]:
        return self.archive.list()

    def elapsed_for(self, vehicle_id: UUID) -> str:
        return format_elapsed(self.registry.get(vehicle_id), self._clock())

    def daily_stats(self, day: Optional[date] = None) -> DailyStats:
        return self.archive.daily_stats(day or self._clock().date())

    # ── Presentation boundary ─────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(event_name, payload). Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, payload: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on '{event}': {e}", exc_info=True)

    # ── Persistence ───────────────────────────────────────────────────────

    def _load(self) -> None:
        visits = self._load_key(self._visits_key, CompletedVisit)
        vehicles = self._load_key(self._vehicles_key, Vehicle)

        self.archive.restore(visits)
        self.registry.reserve(v.id for v in visits)
        self.registry.restore(vehicles)
        logger.info(f"[Persist] Loaded {len(self.registry)} active vehicle(s), {len(self.archive)} past visit(s)")

    def _load_key(self, key: str, record_type) -> list:
        try:
            return self._repository.load(key, record_type) or []
        except PersistenceFailure as e:
            # Unreadable data stays on disk untouched for this session
            self._unwritable_keys.add(key)
            self._warn(f"Could not load saved state, starting empty: {e}")
            return []

    def _save(self, key: str, records: list) -> bool:
        if key in self._unwritable_keys:
            logger.warning(f"[Persist] '{key}' not saved, stored copy could not be read at startup")
            return False
        try:
            self._repository.save(key, records)
        except PersistenceFailure as e:
            self._warn(f"Changes kept for this session only: {e}")
            return False
        return True

    def _warn(self, message: str) -> None:
        self.last_warning = message
        logger.warning(f"[Persist] {message}")
        self._notify("persistence_failed", message)
