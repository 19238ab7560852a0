from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc, to_iso_utc
from ..common.validators import is_blank, require_fields
from ..core.constants import DEFAULT_PASSWORD, DEVICE_ID_PREFIX
from ..core.enums import EmployeeStatus
from ..core.exceptions import (
    DuplicateEmployee,
    DuplicateKey,
    EmployeeNotFound,
    InvalidCredentials,
    MissingFields,
)
from .credentials import CredentialPolicy, PlaintextCredentials
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the login endpoint hands back after a successful check."""

    employee: Employee
    requires_password_change: bool


class EmployeeDirectory:
    """Use case: employee records and their credentials."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        credentials: Optional[CredentialPolicy] = None,
        default_password: str = DEFAULT_PASSWORD,
    ):
        self._employees = employees
        self._credentials = credentials or PlaintextCredentials()
        self._default_password = default_password

    def create(
        self,
        *,
        employee_id: str,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        device_id: Optional[str] = None,
        password: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Employee:
        require_fields(employeeId=employee_id, name=name)
        employee_id = str(employee_id).strip()
        stamp = to_iso_utc(now or now_utc())

        raw_password = password if not is_blank(password) else self._default_password
        employee = Employee(
            employee_id=employee_id,
            name=str(name).strip(),
            email=email or "",
            phone=phone or "",
            department=department or "",
            device_id=device_id or f"{DEVICE_ID_PREFIX}{employee_id}",
            password=self._credentials.prepare(raw_password),
            password_set=False,
            status=EmployeeStatus.INACTIVE,
            is_active=True,
            created_at=stamp,
            last_updated=stamp,
        )

        try:
            self._employees.create(employee)
        except DuplicateKey as e:
            raise DuplicateEmployee(f"Employee ID {employee_id} already exists") from e

        logger.info("employee %s created", employee_id)
        return employee

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(str(employee_id).strip())
        if not employee:
            raise EmployeeNotFound("Employee not found")
        return employee

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def authenticate(self, employee_id: str, password: str) -> LoginResult:
        require_fields(employeeId=employee_id, password=password)

        employee = self._employees.get_by_id(str(employee_id).strip())
        if not employee or not self._credentials.verify(employee.password, password):
            logger.warning("failed login for employee id %r", employee_id)
            raise InvalidCredentials("Invalid credentials")

        return LoginResult(employee=employee, requires_password_change=not employee.password_set)

    def change_password(
        self,
        employee_id: str,
        *,
        old_password: Optional[str],
        new_password: str,
        now: Optional[datetime] = None,
    ) -> Employee:
        if is_blank(new_password):
            raise MissingFields("New password is required")

        employee = self.get(employee_id)

        # Until the first self-service change the default password may be replaced freely.
        if employee.password_set:
            if is_blank(old_password):
                raise MissingFields("Old password is required")
            if not self._credentials.verify(employee.password, old_password):
                raise InvalidCredentials("Old password is incorrect")

        stamp = to_iso_utc(now or now_utc())
        stored = self._credentials.prepare(new_password)
        if not self._employees.set_password(employee.employee_id, password=stored, updated_at=stamp):
            raise EmployeeNotFound("Employee not found")

        logger.info("password updated for employee %s", employee_id)
        return replace(employee, password=stored, password_set=True, last_updated=stamp)
