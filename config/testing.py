DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"

DB_CONFIG = None

TABLES = {
    "employees": "Employees",
    "locations": "EmployeeLocation",
    "attendance": "EmployeeAttendance",
}

DEFAULT_PASSWORD = "12345"

AUTO_INIT_DB = False
ENABLE_SEED_ENDPOINT = True
