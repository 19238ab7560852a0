from __future__ import annotations

import json
import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,63}$")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def quote_identifier(name: str) -> str:
    """Backtick-quote a table name after checking it is a plain identifier."""
    if not _IDENTIFIER.match(name or ""):
        raise ValueError(f"Invalid table name: {name!r}")
    return f"`{name}`"


def decode_json(value: Any) -> Dict[str, Any]:
    """Normalize JSON column values across connector implementations.

    mysql-connector can return JSON as str, bytes/bytearray or (C extension)
    an already-decoded dict.
    """

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    raise TypeError(f"Unsupported JSON column value type: {type(value)!r}")


def encode_json(item: Dict[str, Any]) -> str:
    return json.dumps(item, ensure_ascii=False, separators=(",", ":"))
