# lotkeeper/services/visit_archive.py
"""
Completed visits, newest first. Append-only: there is no update or delete.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from lotkeeper.schemas.completed_visit import CompletedVisit, DailyStats
from lotkeeper.schemas.vehicle import Vehicle


class VisitArchive:
    def __init__(self):
        self._visits: list[CompletedVisit] = []

    def record(self, vehicle: Vehicle, exit_time: datetime, fee: Decimal) -> CompletedVisit:
        visit = CompletedVisit.from_vehicle(vehicle, exit_time, fee)
        self._visits.insert(0, visit)
        return visit

    def list(self) -> list[CompletedVisit]:
        return list(self._visits)

    def restore(self, visits: Iterable[CompletedVisit]) -> None:
        """Load persisted visits. Input is already newest-first."""
        self._visits.extend(visits)

    def daily_stats(self, day: date) -> DailyStats:
        """Visits whose exit fell on `day` (UTC): count, fee total, average stay."""
        visits = [v for v in self._visits if v.exit_time.date() == day]
        total_fees = sum((v.fee for v in visits), Decimal(0))
        avg_seconds = sum(v.stay_seconds for v in visits) / len(visits) if visits else 0
        return DailyStats(
            date=day,
            total_visits=len(visits),
            total_fees=total_fees,
            avg_parking_minutes=round(avg_seconds / 60, 1),
        )

    def __len__(self) -> int:
        return len(self._visits)
