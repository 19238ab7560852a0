from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..common.datetime_utils import (
    epoch_millis,
    format_date,
    format_time,
    now_utc,
    parse_instant,
    parse_iso_date,
    to_iso_utc,
    truncate_millis,
)
from ..common.validators import is_blank, optional_number, require_number
from ..core.constants import (
    DEFAULT_ACCURACY,
    DEFAULT_ACTIVITY_LIMIT,
    DEFAULT_BATTERY,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_SPEED,
    DEVICE_ID_PREFIX,
)
from ..core.exceptions import DuplicateKey, MissingFields, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LocationFix
from .repository import LocationRepository

logger = logging.getLogger(__name__)


def _oldest_first(fixes: Iterable[LocationFix]) -> List[LocationFix]:
    return sorted(fixes, key=lambda f: (f.timestamp, f.location_id))


def _newest_first(fixes: Iterable[LocationFix]) -> List[LocationFix]:
    return sorted(fixes, key=lambda f: (f.timestamp, f.location_id), reverse=True)


def _within(fix: LocationFix, start: datetime, end: datetime) -> bool:
    return start <= fix.timestamp <= end


class LocationLedger:
    """Use case: ingest GPS fixes and serve the derived views.

    Two read orders are deliberate: ``history``/``history_range`` serve the
    path (polyline) view oldest first, ``recent_activity``/``search`` serve
    activity lists newest first.
    """

    def __init__(self, locations: LocationRepository, employees: Optional[EmployeeRepository] = None):
        self._locations = locations
        self._employees = employees

    def record(
        self,
        employee_id: str,
        latitude: Any,
        longitude: Any,
        *,
        device_id: Optional[str] = None,
        speed: Any = None,
        accuracy: Any = None,
        battery: Any = None,
        timestamp: Any = None,
        now: Optional[datetime] = None,
    ) -> LocationFix:
        if is_blank(employee_id) or is_blank(latitude) or is_blank(longitude):
            raise MissingFields("Employee ID, latitude and longitude are required")

        employee_id = str(employee_id).strip()
        lat = require_number(latitude, "latitude")
        lng = require_number(longitude, "longitude")

        now = parse_instant(now or now_utc())
        captured = truncate_millis(now if is_blank(timestamp) else parse_instant(timestamp))

        fix = LocationFix(
            location_id=f"{employee_id}_{epoch_millis(captured)}",
            employee_id=employee_id,
            device_id=device_id or f"{DEVICE_ID_PREFIX}{employee_id}",
            latitude=lat,
            longitude=lng,
            speed=optional_number(speed, "speed", DEFAULT_SPEED),
            accuracy=optional_number(accuracy, "accuracy", DEFAULT_ACCURACY),
            battery=optional_number(battery, "battery", DEFAULT_BATTERY),
            timestamp=captured,
            date=format_date(captured),
            time=format_time(captured),
        )

        try:
            self._locations.append(fix)
        except DuplicateKey as e:
            raise DuplicateKey(f"Location {fix.location_id} already recorded") from e

        if self._employees is not None:
            touched = self._employees.set_last_location(
                employee_id,
                latitude=lat,
                longitude=lng,
                located_at=to_iso_utc(captured),
                updated_at=to_iso_utc(now),
            )
            if not touched:
                logger.warning("location %s stored for unknown employee %s", fix.location_id, employee_id)

        return fix

    def latest_per_employee(self) -> List[LocationFix]:
        """One fix per employee, the one with the greatest timestamp.

        Ties on timestamp go to the greater ``location_id``. Output is newest
        first, then by employee id.
        """

        latest: Dict[str, LocationFix] = {}
        for fix in self._locations.list_all():
            current = latest.get(fix.employee_id)
            if current is None or (fix.timestamp, fix.location_id) > (current.timestamp, current.location_id):
                latest[fix.employee_id] = fix

        by_employee = sorted(latest.values(), key=lambda f: f.employee_id)
        return sorted(by_employee, key=lambda f: f.timestamp, reverse=True)

    def history(self, employee_id: str, *, date: Optional[str] = None) -> List[LocationFix]:
        """Path view for one employee, optionally limited to a UTC calendar date."""
        if date is not None:
            parse_iso_date(date)
        return _oldest_first(self._locations.find(employee_id=str(employee_id), date=date))

    def history_range(self, employee_id: str, start: Any, end: Any) -> List[LocationFix]:
        """Path view for one employee between two instants, inclusive."""
        start_at, end_at = self._range(start, end)
        fixes = self._locations.find(employee_id=str(employee_id))
        return _oldest_first(f for f in fixes if _within(f, start_at, end_at))

    def recent_activity(
        self,
        employee_id: str,
        *,
        start: Any = None,
        end: Any = None,
        limit: int = DEFAULT_ACTIVITY_LIMIT,
    ) -> List[LocationFix]:
        fixes = self._locations.find(employee_id=str(employee_id))
        if start is not None and end is not None:
            start_at, end_at = self._range(start, end)
            fixes = [f for f in fixes if _within(f, start_at, end_at)]
        return _newest_first(fixes)[:limit]

    def search(
        self,
        *,
        employee_id: Optional[str] = None,
        device_id: Optional[str] = None,
        date: Optional[str] = None,
        start: Any = None,
        end: Any = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> List[LocationFix]:
        """Dashboard query. Filters combine with AND; the range needs both ends."""
        if date is not None:
            parse_iso_date(date)
        fixes = self._locations.find(employee_id=employee_id, device_id=device_id, date=date)
        if start is not None and end is not None:
            start_at, end_at = self._range(start, end)
            fixes = [f for f in fixes if _within(f, start_at, end_at)]
        return _newest_first(fixes)[:limit]

    @staticmethod
    def _range(start: Any, end: Any) -> tuple[datetime, datetime]:
        if is_blank(start) or is_blank(end):
            raise MissingFields("startDate and endDate are required")
        start_at = parse_instant(start)
        end_at = parse_instant(end)
        if start_at > end_at:
            raise ValidationError("startDate must not be after endDate")
        return start_at, end_at
