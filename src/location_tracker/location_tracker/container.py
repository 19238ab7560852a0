from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.service import AttendanceTracker
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .core.constants import DEFAULT_PASSWORD
from .database.connection import DBConfig, DatabaseConnection, TableNames
from .database.memory_record_store import InMemoryRecordStore
from .database.mysql_record_store import MySQLRecordStore
from .database.record_store import RecordStore
from .employees.service import EmployeeDirectory
from .employees.store_employee_repository import StoreEmployeeRepository
from .locations.service import LocationLedger
from .locations.store_location_repository import StoreLocationRepository

STORE_BACKENDS = {"mysql", "memory"}


@dataclass(frozen=True)
class Container:
    store: RecordStore
    tables: TableNames

    employees_repo: StoreEmployeeRepository
    locations_repo: StoreLocationRepository
    attendance_repo: StoreAttendanceRepository

    employee_directory: EmployeeDirectory
    location_ledger: LocationLedger
    attendance_tracker: AttendanceTracker


def build_store(*, store_backend: str, db_config: Optional[dict] = None) -> RecordStore:
    if store_backend == "memory":
        return InMemoryRecordStore()
    if store_backend != "mysql":
        raise ValueError(f"Unknown STORE_BACKEND {store_backend!r} (expected one of {sorted(STORE_BACKENDS)})")
    if not db_config:
        raise ValueError("DB_CONFIG is required for the mysql store backend")

    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    return MySQLRecordStore(DatabaseConnection.get_instance(config))


def build_container(
    *,
    store_backend: str = "mysql",
    db_config: Optional[dict] = None,
    tables: Optional[Mapping[str, str]] = None,
    default_password: str = DEFAULT_PASSWORD,
    store: Optional[RecordStore] = None,
) -> Container:
    store = store or build_store(store_backend=store_backend, db_config=db_config)
    table_names = TableNames.from_mapping(tables)

    employees_repo = StoreEmployeeRepository(store, table=table_names.employees)
    locations_repo = StoreLocationRepository(store, table=table_names.locations)
    attendance_repo = StoreAttendanceRepository(store, table=table_names.attendance)

    employee_directory = EmployeeDirectory(employees_repo, default_password=default_password)
    location_ledger = LocationLedger(locations_repo, employees_repo)
    attendance_tracker = AttendanceTracker(attendance_repo, employees_repo)

    return Container(
        store=store,
        tables=table_names,
        employees_repo=employees_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        employee_directory=employee_directory,
        location_ledger=location_ledger,
        attendance_tracker=attendance_tracker,
    )
