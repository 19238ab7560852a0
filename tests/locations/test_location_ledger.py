from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.location_tracker.location_tracker.core.enums import EmployeeStatus
from src.location_tracker.location_tracker.core.exceptions import DuplicateKey, MissingFields, ValidationError
from src.location_tracker.location_tracker.locations.model import LocationFix

T0 = datetime(2026, 2, 1, 8, 0, 0, tzinfo=timezone.utc)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


def test_record_then_history_returns_exactly_that_fix(container):
    ledger = container.location_ledger

    fix = ledger.record("E1", 12.9, 77.6, now=T0)

    assert ledger.history("E1") == [fix]
    assert fix.location_id == f"E1_{int(T0.timestamp() * 1000)}"
    assert fix.date == "2026-02-01"
    assert fix.time == "08:00:00"


def test_record_with_sub_millisecond_clock_reads_back_unchanged(container):
    ledger = container.location_ledger
    now = T0.replace(microsecond=123456)

    fix = ledger.record("E1", 12.9, 77.6, now=now)

    assert ledger.history("E1") == [fix]
    assert fix.timestamp == T0.replace(microsecond=123000)
    assert fix.location_id == "E1_1769932800123"


def test_keys_round_down_so_adjacent_instants_do_not_collide(container):
    ledger = container.location_ledger

    first = ledger.record("E1", 1, 1, timestamp="2026-02-01T08:00:00.999600Z")
    second = ledger.record("E1", 2, 2, timestamp="2026-02-01T08:00:01.000Z")

    assert first.location_id == "E1_1769932800999"
    assert second.location_id == "E1_1769932801000"
    assert [f.latitude for f in ledger.history("E1")] == [1.0, 2.0]


def test_record_coerces_numbers_and_applies_defaults(container):
    fix = container.location_ledger.record("E1", "12.5", "-3.25", now=T0)

    assert (fix.latitude, fix.longitude) == (12.5, -3.25)
    assert (fix.speed, fix.accuracy, fix.battery) == (0.0, 0.0, 100.0)
    assert fix.device_id == "DEVICE_E1"


def test_record_accepts_zero_coordinates(container):
    fix = container.location_ledger.record("E1", 0, 0, now=T0)

    assert (fix.latitude, fix.longitude) == (0.0, 0.0)


@pytest.mark.parametrize(
    "employee_id,lat,lng",
    [("", 1, 2), ("E1", None, 2), ("E1", 1, ""), (None, None, None)],
)
def test_record_requires_employee_and_coordinates(container, employee_id, lat, lng):
    with pytest.raises(MissingFields):
        container.location_ledger.record(employee_id, lat, lng)


@pytest.mark.parametrize("lat", ["north", "nan", float("inf"), True])
def test_record_rejects_non_numeric_coordinates(container, lat):
    with pytest.raises(ValidationError):
        container.location_ledger.record("E1", lat, 2)


def test_record_uses_client_timestamp_in_millis_or_iso(container):
    ledger = container.location_ledger
    millis = int(_at(5).timestamp() * 1000)

    a = ledger.record("E1", 1, 1, timestamp=millis, now=T0)
    b = ledger.record("E1", 1, 1, timestamp="2026-02-01T09:15:30Z", now=T0)

    assert a.timestamp == _at(5)
    assert a.location_id == f"E1_{millis}"
    assert b.timestamp == datetime(2026, 2, 1, 9, 15, 30, tzinfo=timezone.utc)
    assert b.time == "09:15:30"


def test_record_rejects_same_capture_instant_twice(container):
    ledger = container.location_ledger
    ledger.record("E1", 1, 1, now=T0)

    with pytest.raises(DuplicateKey):
        ledger.record("E1", 2, 2, now=T0)


def test_record_updates_owning_employee(container):
    container.employee_directory.create(employee_id="E1", name="A")

    container.location_ledger.record("E1", 12.9, 77.6, now=T0)

    employee = container.employee_directory.get("E1")
    assert employee.status == EmployeeStatus.ACTIVE
    assert (employee.last_latitude, employee.last_longitude) == (12.9, 77.6)
    assert employee.last_location_time == "2026-02-01T08:00:00.000Z"


def test_record_for_unknown_employee_still_stores_fix(container):
    fix = container.location_ledger.record("ghost", 1, 1, now=T0)

    assert container.location_ledger.history("ghost") == [fix]
    assert container.employees_repo.get_by_id("ghost") is None


def test_latest_per_employee_keeps_max_timestamp(container):
    ledger = container.location_ledger
    ledger.record("E1", 1, 1, timestamp=_at(10), now=T0)
    e1_latest = ledger.record("E1", 2, 2, timestamp=_at(30), now=T0)
    ledger.record("E1", 3, 3, timestamp=_at(20), now=T0)
    e2_latest = ledger.record("E2", 4, 4, timestamp=_at(40), now=T0)
    ledger.record("E2", 5, 5, timestamp=_at(5), now=T0)
    e3_only = ledger.record("E3", 6, 6, timestamp=_at(30), now=T0)

    latest = ledger.latest_per_employee()

    assert latest == [e2_latest, e1_latest, e3_only]


def test_latest_per_employee_tie_goes_to_greater_location_id(container):
    same = _at(1)
    for location_id in ("E1_a", "E1_b"):
        container.locations_repo.append(
            LocationFix(
                location_id=location_id,
                employee_id="E1",
                device_id="D",
                latitude=1.0,
                longitude=1.0,
                speed=0.0,
                accuracy=0.0,
                battery=100.0,
                timestamp=same,
                date="2026-02-01",
                time="08:01:00",
            )
        )

    assert [f.location_id for f in container.location_ledger.latest_per_employee()] == ["E1_b"]


def test_path_views_are_oldest_first_and_activity_newest_first(container):
    ledger = container.location_ledger
    late = ledger.record("E1", 1, 1, timestamp=_at(30), now=T0)
    early = ledger.record("E1", 2, 2, timestamp=_at(10), now=T0)
    middle = ledger.record("E1", 3, 3, timestamp=_at(20), now=T0)
    ledger.record("E2", 4, 4, timestamp=_at(15), now=T0)

    assert ledger.history("E1") == [early, middle, late]
    assert ledger.history_range("E1", _at(10), _at(20)) == [early, middle]
    assert ledger.recent_activity("E1") == [late, middle, early]
    assert ledger.recent_activity("E1", limit=1) == [late]


def test_history_filters_by_utc_date(container):
    ledger = container.location_ledger
    first = ledger.record("E1", 1, 1, timestamp="2026-02-01T23:59:59Z", now=T0)
    ledger.record("E1", 1, 1, timestamp="2026-02-02T00:00:01Z", now=T0)

    assert ledger.history("E1", date="2026-02-01") == [first]
    with pytest.raises(ValidationError):
        ledger.history("E1", date="01/02/2026")


def test_history_range_validates_bounds(container):
    with pytest.raises(ValidationError):
        container.location_ledger.history_range("E1", _at(20), _at(10))
    with pytest.raises(MissingFields):
        container.location_ledger.history_range("E1", None, _at(10))


def test_search_combines_filters_and_limits_after_sorting(container):
    ledger = container.location_ledger
    a = ledger.record("E1", 1, 1, device_id="D1", timestamp=_at(1), now=T0)
    b = ledger.record("E1", 1, 1, device_id="D2", timestamp=_at(2), now=T0)
    c = ledger.record("E2", 1, 1, device_id="D1", timestamp=_at(3), now=T0)

    assert ledger.search() == [c, b, a]
    assert ledger.search(device_id="D1") == [c, a]
    assert ledger.search(employee_id="E1", device_id="D1") == [a]
    assert ledger.search(start=_at(2), end=_at(3)) == [c, b]
    assert ledger.search(start=_at(2)) == [c, b, a]
    assert ledger.search(limit=2) == [c, b]
