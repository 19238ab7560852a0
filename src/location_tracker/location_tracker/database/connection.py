from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


@dataclass(frozen=True)
class TableNames:
    """Physical table per entity kind, handed to the store at construction."""

    employees: str = "Employees"
    locations: str = "EmployeeLocation"
    attendance: str = "EmployeeAttendance"

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, str]]) -> "TableNames":
        values = values or {}
        defaults = cls()
        return cls(
            employees=str(values.get("employees") or defaults.employees),
            locations=str(values.get("locations") or defaults.locations),
            attendance=str(values.get("attendance") or defaults.attendance),
        )

    def all(self) -> tuple[str, str, str]:
        return (self.employees, self.locations, self.attendance)


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
