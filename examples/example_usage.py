"""Example: use the service layer directly (no Flask).

Runs against the in-memory store, so no database is needed.
"""

from src.location_tracker.location_tracker.container import build_container


def main():
    container = build_container(store_backend="memory")

    container.employee_directory.create(employee_id="E1", name="A")
    container.location_ledger.record("E1", 12.9, 77.6)
    container.attendance_tracker.clock_in("E1")

    print(container.attendance_tracker.status("E1"))
    print(container.location_ledger.latest_per_employee())
    print(container.attendance_tracker.daily_stats())


if __name__ == "__main__":
    main()
