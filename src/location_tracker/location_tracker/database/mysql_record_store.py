from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, List, Mapping, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConditionFailed, DuplicateKey, RecordNotFound, StoreUnavailable
from .connection import DatabaseConnection
from .mysql_base import db_cursor, decode_json, encode_json, fetchall, fetchone, quote_identifier
from .record_store import Item, Predicate, RecordStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(action: str, table: str, key: Optional[str] = None):
    try:
        yield
    except mysql.connector.IntegrityError as e:
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateKey(f"{table}: key {key!r} already exists") from e
        logger.error("store %s on %s failed: %s", action, table, e)
        raise StoreUnavailable(f"Store {action} failed") from e
    except mysql.connector.Error as e:
        logger.error("store %s on %s failed: %s", action, table, e)
        raise StoreUnavailable(f"Store {action} failed") from e


class MySQLRecordStore(RecordStore):
    """Document tables on MySQL: ``record_key`` primary key plus a JSON ``body``.

    Insert-if-absent relies on the primary key, so two concurrent inserts of
    the same key resolve to one winner inside MySQL.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def put(self, table: str, key: str, item: Mapping[str, Any], *, if_absent: bool = False) -> None:
        name = quote_identifier(table)
        body = encode_json(dict(item))
        if if_absent:
            sql = f"INSERT INTO {name}(record_key, body) VALUES(%s, %s)"
        else:
            sql = (
                f"INSERT INTO {name}(record_key, body) VALUES(%s, %s) "
                "ON DUPLICATE KEY UPDATE body=VALUES(body)"
            )
        with _store_errors("put", table, key):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, (key, body))

    def get(self, table: str, key: str) -> Item:
        name = quote_identifier(table)
        with _store_errors("get", table, key):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT body FROM {name} WHERE record_key=%s", (key,))
                row = fetchone(cur)
        if not row:
            raise RecordNotFound(f"{table}: key {key!r} not found")
        return decode_json(row["body"])

    def update(
        self,
        table: str,
        key: str,
        fields: Mapping[str, Any],
        *,
        condition: Optional[Predicate] = None,
    ) -> Item:
        name = quote_identifier(table)
        with _store_errors("update", table, key):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT body FROM {name} WHERE record_key=%s FOR UPDATE", (key,))
                row = fetchone(cur)
                if not row:
                    raise RecordNotFound(f"{table}: key {key!r} not found")
                merged = decode_json(row["body"])
                if condition is not None and not condition(merged):
                    raise ConditionFailed(f"{table}: key {key!r} failed update condition")
                merged.update(fields)
                cur.execute(f"UPDATE {name} SET body=%s WHERE record_key=%s", (encode_json(merged), key))
        return merged

    def scan(self, table: str, predicate: Optional[Predicate] = None) -> List[Item]:
        name = quote_identifier(table)
        with _store_errors("scan", table):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT body FROM {name} ORDER BY record_key")
                rows = fetchall(cur)
        items = [decode_json(r["body"]) for r in rows]
        if predicate is None:
            return items
        return [item for item in items if predicate(item)]
