import os

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "mysql" or "memory" (process-local, data is lost on restart)
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "location_tracker"),
}

TABLES = {
    "employees": os.getenv("EMPLOYEES_TABLE", "Employees"),
    "locations": os.getenv("LOCATION_TABLE", "EmployeeLocation"),
    "attendance": os.getenv("ATTENDANCE_TABLE", "EmployeeAttendance"),
}

# Password given to employees created without one
DEFAULT_PASSWORD = os.getenv("DEFAULT_PASSWORD", "12345")

# If enabled, app creates the database and tables on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Exposes POST /api/seed-test-data
ENABLE_SEED_ENDPOINT = bool(int(os.getenv("ENABLE_SEED_ENDPOINT", "1")))
