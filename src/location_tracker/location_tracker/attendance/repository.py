from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def create(self, record: AttendanceRecord) -> None:
        """Insert-if-absent on (employee, day); raises ``DuplicateKey`` on conflict."""

        raise NotImplementedError

    def find_for_employee_and_date(self, employee_id: str, day: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def mark_clocked_out(
        self,
        *,
        attendance_id: str,
        clock_out_time: datetime,
        status: str,
    ) -> Optional[AttendanceRecord]:
        """Close an open record. ``None`` if it is gone or was closed meanwhile."""

        raise NotImplementedError

    def list_for_date(self, day: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
