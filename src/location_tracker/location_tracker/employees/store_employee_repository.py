from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeStatus
from ..core.exceptions import RecordNotFound
from ..database.record_store import RecordStore
from .model import Employee, from_document, to_document
from .repository import EmployeeRepository


class StoreEmployeeRepository(EmployeeRepository):
    def __init__(self, store: RecordStore, *, table: str):
        self._store = store
        self._table = table

    def create(self, employee: Employee) -> None:
        self._store.put(self._table, employee.employee_id, to_document(employee), if_absent=True)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        try:
            return from_document(self._store.get(self._table, employee_id))
        except RecordNotFound:
            return None

    def list_all(self) -> Sequence[Employee]:
        return [from_document(doc) for doc in self._store.scan(self._table)]

    def set_password(self, employee_id: str, *, password: str, updated_at: str) -> bool:
        return self._update(
            employee_id,
            {"password": password, "passwordSet": True, "lastUpdated": updated_at},
        )

    def set_status(self, employee_id: str, *, status: EmployeeStatus, updated_at: str) -> bool:
        return self._update(employee_id, {"status": status.value, "lastUpdated": updated_at})

    def set_last_location(
        self,
        employee_id: str,
        *,
        latitude: float,
        longitude: float,
        located_at: str,
        updated_at: str,
    ) -> bool:
        return self._update(
            employee_id,
            {
                "lastLocationTime": located_at,
                "lastLatitude": latitude,
                "lastLongitude": longitude,
                "status": EmployeeStatus.ACTIVE.value,
                "lastUpdated": updated_at,
            },
        )

    def _update(self, employee_id: str, fields: Dict[str, Any]) -> bool:
        try:
            self._store.update(self._table, employee_id, fields)
        except RecordNotFound:
            return False
        return True
