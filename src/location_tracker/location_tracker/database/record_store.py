from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

Item = Dict[str, Any]
Predicate = Callable[[Item], bool]


class RecordStore(Protocol):
    """Key-value/document store used by every repository.

    Contract:
    - ``put`` inserts or overwrites; with ``if_absent=True`` a present key
      raises ``DuplicateKey``. The check is done by the backend atomically.
    - ``get`` returns the item or raises ``RecordNotFound``.
    - ``update`` merges ``fields`` into an existing item and returns the
      merged item, raising ``RecordNotFound`` when the key is absent. With
      ``condition`` the current item must satisfy it or ``ConditionFailed``
      is raised; check and write happen under the same lock.
    - ``scan`` returns every item for which ``predicate`` is true (all items
      when it is ``None``). Full read, no pagination.

    Backend failures surface as ``StoreUnavailable``; nothing is retried.
    """

    def put(self, table: str, key: str, item: Mapping[str, Any], *, if_absent: bool = False) -> None:
        raise NotImplementedError

    def get(self, table: str, key: str) -> Item:
        raise NotImplementedError

    def update(
        self,
        table: str,
        key: str,
        fields: Mapping[str, Any],
        *,
        condition: Optional[Predicate] = None,
    ) -> Item:
        raise NotImplementedError

    def scan(self, table: str, predicate: Optional[Predicate] = None) -> List[Item]:
        raise NotImplementedError


def where(**expected: Any) -> Predicate:
    """Equality predicate over item attributes, e.g. ``where(employeeId="E1")``."""

    def _match(item: Item) -> bool:
        return all(item.get(name) == value for name, value in expected.items())

    return _match
