from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .common.datetime_utils import now_utc
from .container import Container
from .core.exceptions import DuplicateEmployee, DuplicateKey

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES = [
    {
        "employee_id": "EMP001",
        "name": "John Smith",
        "email": "john@company.com",
        "phone": "+1234567890",
        "department": "Sales",
        "device_id": "GPS_TRACKER_001",
    },
    {
        "employee_id": "EMP002",
        "name": "Sarah Johnson",
        "email": "sarah@company.com",
        "phone": "+1987654321",
        "department": "Marketing",
        "device_id": "GPS_TRACKER_002",
    },
]

DEMO_FIXES = [
    {"employee_id": "EMP001", "latitude": 40.7128, "longitude": -74.0060, "speed": 25.5, "accuracy": 10, "battery": 85},
    {"employee_id": "EMP002", "latitude": 34.0522, "longitude": -118.2437, "speed": 18.2, "accuracy": 15, "battery": 92},
]


@dataclass(frozen=True)
class SeedResult:
    employees: int
    locations: int


def seed_demo_data(container: Container, *, now: Optional[datetime] = None) -> SeedResult:
    """Create two demo employees with one fix each.

    Safe to run repeatedly: employees that already exist are kept and an
    employee that already has fixes gets no new demo fix.
    """
    now = now or now_utc()
    employees = 0
    locations = 0

    for profile in DEMO_EMPLOYEES:
        try:
            container.employee_directory.create(**profile, now=now)
            employees += 1
        except DuplicateEmployee:
            logger.info("demo employee %s already present", profile["employee_id"])

    for offset, template in enumerate(DEMO_FIXES):
        if container.location_ledger.history(template["employee_id"]):
            continue
        fix = dict(template)
        device_id = next(e["device_id"] for e in DEMO_EMPLOYEES if e["employee_id"] == fix["employee_id"])
        try:
            container.location_ledger.record(
                fix.pop("employee_id"),
                fix.pop("latitude"),
                fix.pop("longitude"),
                device_id=device_id,
                timestamp=now + timedelta(seconds=offset),
                now=now,
                **fix,
            )
            locations += 1
        except DuplicateKey:
            logger.info("demo location for %s already present", template["employee_id"])

    return SeedResult(employees=employees, locations=locations)
