from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_iso_local
from ..core.exceptions import ConditionFailed, RecordNotFound
from ..database.record_store import RecordStore, where
from .model import AttendanceRecord, from_document, to_document
from .repository import AttendanceRepository


def _still_open(doc: dict) -> bool:
    return bool(doc.get("clockInTime")) and not doc.get("clockOutTime")


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: RecordStore, *, table: str):
        self._store = store
        self._table = table

    def create(self, record: AttendanceRecord) -> None:
        self._store.put(self._table, record.attendance_id, to_document(record), if_absent=True)

    def find_for_employee_and_date(self, employee_id: str, day: str) -> Optional[AttendanceRecord]:
        docs = self._store.scan(self._table, where(employeeId=employee_id, date=day))
        records = [from_document(doc) for doc in docs]
        if not records:
            return None
        # Prefer an open session if older data holds more than one row for the day.
        open_records = [r for r in records if r.is_open]
        return (open_records or records)[0]

    def mark_clocked_out(
        self,
        *,
        attendance_id: str,
        clock_out_time: datetime,
        status: str,
    ) -> Optional[AttendanceRecord]:
        try:
            doc = self._store.update(
                self._table,
                attendance_id,
                {"clockOutTime": to_iso_local(clock_out_time), "status": status},
                condition=_still_open,
            )
        except (RecordNotFound, ConditionFailed):
            return None
        return from_document(doc)

    def list_for_date(self, day: str) -> Sequence[AttendanceRecord]:
        return [from_document(doc) for doc in self._store.scan(self._table, where(date=day))]

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        return [from_document(doc) for doc in self._store.scan(self._table, where(employeeId=employee_id))]
