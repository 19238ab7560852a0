from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete store.
    Mutators return ``False`` when the employee does not exist.
    """

    def create(self, employee: Employee) -> None:
        """Insert-if-absent; raises ``DuplicateKey`` when the id exists."""

        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def set_password(self, employee_id: str, *, password: str, updated_at: str) -> bool:
        raise NotImplementedError

    def set_status(self, employee_id: str, *, status: EmployeeStatus, updated_at: str) -> bool:
        raise NotImplementedError

    def set_last_location(
        self,
        employee_id: str,
        *,
        latitude: float,
        longitude: float,
        located_at: str,
        updated_at: str,
    ) -> bool:
        raise NotImplementedError
