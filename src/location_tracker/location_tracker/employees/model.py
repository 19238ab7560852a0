from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no store access). Timestamps are ISO-8601 UTC strings.
    """

    employee_id: str
    name: str
    email: str
    phone: str
    department: str
    device_id: str
    password: str
    password_set: bool
    status: EmployeeStatus
    is_active: bool
    created_at: str
    last_updated: str
    last_latitude: Optional[float] = None
    last_longitude: Optional[float] = None
    last_location_time: Optional[str] = None


def to_document(employee: Employee) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "employeeId": employee.employee_id,
        "name": employee.name,
        "email": employee.email,
        "phone": employee.phone,
        "department": employee.department,
        "deviceId": employee.device_id,
        "password": employee.password,
        "passwordSet": employee.password_set,
        "status": employee.status.value,
        "isActive": employee.is_active,
        "createdAt": employee.created_at,
        "lastUpdated": employee.last_updated,
    }
    if employee.last_location_time is not None:
        doc["lastLatitude"] = employee.last_latitude
        doc["lastLongitude"] = employee.last_longitude
        doc["lastLocationTime"] = employee.last_location_time
    return doc


def from_document(doc: Dict[str, Any]) -> Employee:
    status = doc.get("status") or EmployeeStatus.INACTIVE.value
    return Employee(
        employee_id=str(doc["employeeId"]),
        name=doc.get("name", ""),
        email=doc.get("email", ""),
        phone=doc.get("phone", ""),
        department=doc.get("department", ""),
        device_id=doc.get("deviceId", ""),
        password=doc.get("password", ""),
        password_set=bool(doc.get("passwordSet", False)),
        status=EmployeeStatus(status) if status in {s.value for s in EmployeeStatus} else EmployeeStatus.INACTIVE,
        is_active=bool(doc.get("isActive", True)),
        created_at=doc.get("createdAt", ""),
        last_updated=doc.get("lastUpdated", ""),
        last_latitude=doc.get("lastLatitude"),
        last_longitude=doc.get("lastLongitude"),
        last_location_time=doc.get("lastLocationTime"),
    )


def public_view(employee: Employee) -> Dict[str, Any]:
    """Outbound shape: the stored document without the password."""
    doc = to_document(employee)
    doc.pop("password", None)
    return doc
