from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LocationFix


class LocationRepository(Protocol):
    """Append-only ledger of fixes. Reads are full scans filtered in memory."""

    def append(self, fix: LocationFix) -> None:
        """Insert-if-absent; raises ``DuplicateKey`` for an existing ``location_id``."""

        raise NotImplementedError

    def list_all(self) -> Sequence[LocationFix]:
        raise NotImplementedError

    def find(
        self,
        *,
        employee_id: Optional[str] = None,
        device_id: Optional[str] = None,
        date: Optional[str] = None,
    ) -> Sequence[LocationFix]:
        raise NotImplementedError
