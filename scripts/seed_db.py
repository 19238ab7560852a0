from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.location_tracker.location_tracker.container import build_container
from src.location_tracker.location_tracker.demo_data import seed_demo_data


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        store_backend=getattr(settings, "STORE_BACKEND", "mysql"),
        db_config=settings.DB_CONFIG,
        tables=getattr(settings, "TABLES", None),
    )

    result = seed_demo_data(container)
    print(f"OK: Seeded demo data -> employees={result.employees} locations={result.locations}")


if __name__ == "__main__":
    main()
