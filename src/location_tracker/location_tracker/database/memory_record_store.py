from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Mapping, Optional

from ..core.exceptions import ConditionFailed, DuplicateKey, RecordNotFound
from .record_store import Item, Predicate, RecordStore


class InMemoryRecordStore(RecordStore):
    """Process-local store for tests, demos and ``STORE_BACKEND=memory``.

    A single lock makes insert-if-absent and update atomic. Items are copied
    on the way in and out so callers never share state with the store.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[str, Item]] = {}
        self._lock = threading.Lock()

    def _table(self, table: str) -> Dict[str, Item]:
        return self._tables.setdefault(table, {})

    def put(self, table: str, key: str, item: Mapping[str, Any], *, if_absent: bool = False) -> None:
        with self._lock:
            rows = self._table(table)
            if if_absent and key in rows:
                raise DuplicateKey(f"{table}: key {key!r} already exists")
            rows[key] = copy.deepcopy(dict(item))

    def get(self, table: str, key: str) -> Item:
        with self._lock:
            rows = self._table(table)
            if key not in rows:
                raise RecordNotFound(f"{table}: key {key!r} not found")
            return copy.deepcopy(rows[key])

    def update(
        self,
        table: str,
        key: str,
        fields: Mapping[str, Any],
        *,
        condition: Optional[Predicate] = None,
    ) -> Item:
        with self._lock:
            rows = self._table(table)
            if key not in rows:
                raise RecordNotFound(f"{table}: key {key!r} not found")
            if condition is not None and not condition(copy.deepcopy(rows[key])):
                raise ConditionFailed(f"{table}: key {key!r} failed update condition")
            rows[key].update(copy.deepcopy(dict(fields)))
            return copy.deepcopy(rows[key])

    def scan(self, table: str, predicate: Optional[Predicate] = None) -> List[Item]:
        with self._lock:
            items = [copy.deepcopy(item) for item in self._table(table).values()]
        if predicate is None:
            return items
        return [item for item in items if predicate(item)]
