from __future__ import annotations

from dataclasses import dataclass

import mysql.connector

from .connection import TableNames
from .mysql_base import quote_identifier


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "location_tracker")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def table_ddl(table: str) -> str:
    return (
        f"CREATE TABLE IF NOT EXISTS {quote_identifier(table)} ("
        " record_key VARCHAR(191) NOT NULL PRIMARY KEY,"
        " body JSON NOT NULL,"
        " created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,"
        " updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP"
        ") CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
    )


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS {quote_identifier(target.database)} "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, tables: TableNames) -> None:
    """Create the database and one document table per entity kind (idempotent)."""
    ensure_database_exists(db_config)

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for table in tables.all():
            cur.execute(table_ddl(table))
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
