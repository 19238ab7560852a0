from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import format_date, now_local, now_utc, parse_iso_date, to_iso_utc
from ..common.validators import is_blank, require_non_empty
from ..core.enums import AttendanceStatus, EmployeeStatus
from ..core.exceptions import AlreadyClockedIn, DuplicateKey, EmployeeNotFound, NoActiveSession, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, AttendanceState, DailyStats, attendance_key
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """Use case: daily clock-in/clock-out per employee.

    Per employee and local day: NONE -> CLOCKED_IN -> CLOCKED_OUT. The
    one-record-per-day rule is enforced by the store's insert-if-absent, so
    concurrent clock-ins leave exactly one record.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def clock_in(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "Employee ID")
        now = now or now_local()
        today = format_date(now)

        if not self._employees.get_by_id(employee_id):
            raise EmployeeNotFound("Employee not found")

        record = AttendanceRecord(
            attendance_id=attendance_key(employee_id, today),
            employee_id=employee_id,
            date=today,
            clock_in_time=now.replace(microsecond=0),
            clock_out_time=None,
            status=AttendanceStatus.PRESENT.value,
        )
        try:
            self._attendance.create(record)
        except DuplicateKey as e:
            raise AlreadyClockedIn("Already clocked in today") from e

        self._employees.set_status(employee_id, status=EmployeeStatus.ACTIVE, updated_at=to_iso_utc(now_utc()))
        logger.info("employee %s clocked in for %s", employee_id, today)
        return record

    def clock_out(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "Employee ID")
        now = now or now_local()
        today = format_date(now)

        record = self._attendance.find_for_employee_and_date(employee_id, today)
        if not record:
            raise NoActiveSession("No clock-in found for today")
        if not record.is_open:
            raise NoActiveSession("Already clocked out today")

        updated = self._attendance.mark_clocked_out(
            attendance_id=record.attendance_id,
            clock_out_time=now.replace(microsecond=0),
            status=AttendanceStatus.PRESENT.value,
        )
        if not updated:
            raise NoActiveSession("Already clocked out today")

        self._employees.set_status(employee_id, status=EmployeeStatus.INACTIVE, updated_at=to_iso_utc(now_utc()))
        logger.info("employee %s clocked out for %s", employee_id, today)
        return updated

    def status(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceState:
        employee_id = require_non_empty(employee_id, "Employee ID")
        today = format_date(now or now_local())

        record = self._attendance.find_for_employee_and_date(employee_id, today)
        return AttendanceState(
            employee_id=employee_id,
            is_clocked_in=bool(record and record.is_clocked_in),
            record=record,
        )

    def daily_stats(self, *, now: Optional[datetime] = None) -> DailyStats:
        today = format_date(now or now_local())

        present = [r for r in self._attendance.list_for_date(today) if r.status == AttendanceStatus.PRESENT.value]
        employees = self._employees.list_all()
        return DailyStats(
            date=today,
            present_count=len(present),
            active_count=sum(1 for r in present if r.clock_out_time is None),
            total_active_employees=sum(1 for e in employees if e.is_active),
            total_employees=len(employees),
        )

    def history(
        self,
        employee_id: str,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> List[AttendanceRecord]:
        """Attendance days of one employee, newest first. Bounds are inclusive dates."""
        employee_id = require_non_empty(employee_id, "Employee ID")
        for bound in (start, end):
            if not is_blank(bound):
                parse_iso_date(bound)
        if not is_blank(start) and not is_blank(end) and start > end:
            raise ValidationError("startDate must not be after endDate")

        records = [
            r
            for r in self._attendance.list_for_employee(employee_id)
            if (is_blank(start) or r.date >= start) and (is_blank(end) or r.date <= end)
        ]
        return sorted(records, key=lambda r: r.date, reverse=True)
