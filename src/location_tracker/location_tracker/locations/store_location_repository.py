from __future__ import annotations

from typing import Optional, Sequence

from ..database.record_store import RecordStore, where
from .model import LocationFix, from_document, to_document
from .repository import LocationRepository


class StoreLocationRepository(LocationRepository):
    def __init__(self, store: RecordStore, *, table: str):
        self._store = store
        self._table = table

    def append(self, fix: LocationFix) -> None:
        self._store.put(self._table, fix.location_id, to_document(fix), if_absent=True)

    def list_all(self) -> Sequence[LocationFix]:
        return [from_document(doc) for doc in self._store.scan(self._table)]

    def find(
        self,
        *,
        employee_id: Optional[str] = None,
        device_id: Optional[str] = None,
        date: Optional[str] = None,
    ) -> Sequence[LocationFix]:
        filters = {}
        if employee_id is not None:
            filters["employeeId"] = employee_id
        if device_id is not None:
            filters["deviceId"] = device_id
        if date is not None:
            filters["date"] = date
        docs = self._store.scan(self._table, where(**filters) if filters else None)
        return [from_document(doc) for doc in docs]
