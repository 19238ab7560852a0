from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import to_iso_local
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one local calendar day."""

    attendance_id: str
    employee_id: str
    date: str
    clock_in_time: Optional[datetime]
    clock_out_time: Optional[datetime]
    status: str

    @property
    def is_open(self) -> bool:
        return self.clock_in_time is not None and self.clock_out_time is None

    @property
    def is_clocked_in(self) -> bool:
        return self.status == AttendanceStatus.PRESENT.value and self.is_open


@dataclass(frozen=True)
class AttendanceState:
    """Answer to "is this employee clocked in right now"."""

    employee_id: str
    is_clocked_in: bool
    record: Optional[AttendanceRecord]


@dataclass(frozen=True)
class DailyStats:
    date: str
    present_count: int
    active_count: int
    total_active_employees: int
    total_employees: int


def attendance_key(employee_id: str, day: str) -> str:
    return f"{employee_id}_{day}"


def _parse_clock(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return datetime.fromisoformat(str(value))


def to_document(record: AttendanceRecord) -> Dict[str, Any]:
    return {
        "attendanceId": record.attendance_id,
        "employeeId": record.employee_id,
        "date": record.date,
        "clockInTime": to_iso_local(record.clock_in_time) if record.clock_in_time else "",
        "clockOutTime": to_iso_local(record.clock_out_time) if record.clock_out_time else "",
        "status": record.status,
    }


def from_document(doc: Dict[str, Any]) -> AttendanceRecord:
    employee_id = str(doc["employeeId"])
    day = str(doc["date"])
    return AttendanceRecord(
        attendance_id=str(doc.get("attendanceId") or attendance_key(employee_id, day)),
        employee_id=employee_id,
        date=day,
        clock_in_time=_parse_clock(doc.get("clockInTime")),
        clock_out_time=_parse_clock(doc.get("clockOutTime")),
        status=str(doc.get("status") or ""),
    )
