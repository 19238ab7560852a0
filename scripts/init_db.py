from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.location_tracker.location_tracker.database.bootstrap import apply_schema, list_tables
from src.location_tracker.location_tracker.database.connection import TableNames


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    tables = TableNames.from_mapping(getattr(settings, "TABLES", None))

    apply_schema(db_config, tables)
    found = list_tables(db_config)
    print(
        "OK: Applied schema -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(found)})"
    )


if __name__ == "__main__":
    main()
