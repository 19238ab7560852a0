from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..common.datetime_utils import parse_instant, to_iso_utc


@dataclass(frozen=True)
class LocationFix:
    """Domain entity: one reported GPS sample. Immutable once stored."""

    location_id: str
    employee_id: str
    device_id: str
    latitude: float
    longitude: float
    speed: float
    accuracy: float
    battery: float
    timestamp: datetime  # aware, UTC
    date: str
    time: str


def to_document(fix: LocationFix) -> Dict[str, Any]:
    return {
        "locationId": fix.location_id,
        "employeeId": fix.employee_id,
        "deviceId": fix.device_id,
        "latitude": fix.latitude,
        "longitude": fix.longitude,
        "speed": fix.speed,
        "accuracy": fix.accuracy,
        "battery": fix.battery,
        "timestamp": to_iso_utc(fix.timestamp),
        "date": fix.date,
        "time": fix.time,
    }


def from_document(doc: Dict[str, Any]) -> LocationFix:
    return LocationFix(
        location_id=str(doc["locationId"]),
        employee_id=str(doc["employeeId"]),
        device_id=doc.get("deviceId", ""),
        latitude=float(doc["latitude"]),
        longitude=float(doc["longitude"]),
        speed=float(doc.get("speed") or 0),
        accuracy=float(doc.get("accuracy") or 0),
        battery=float(doc.get("battery") if doc.get("battery") is not None else 100),
        timestamp=parse_instant(doc["timestamp"]),
        date=doc.get("date", ""),
        time=doc.get("time", ""),
    )
