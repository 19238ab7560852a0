from __future__ import annotations

from enum import Enum


class EmployeeStatus(str, Enum):
    """Tracking status of an employee as shown on dashboards."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Status values written by the attendance tracker.

    Stored records may carry other free-text values; only ``present`` counts
    towards "currently clocked in" and the daily stats.
    """

    PRESENT = "present"
