from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One transaction: commit when the block exits cleanly, else roll back."""
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


def normalize_mysql_number(value: Any) -> Optional[Union[int, float]]:
    """Normalize numeric column values across connector implementations.

    mysql-connector can return DOUBLE/DECIMAL columns as float, Decimal or
    (with some converters) str. Whole numbers come back as int.
    """

    if value is None:
        return None

    if isinstance(value, bool):
        return int(value)

    if isinstance(value, int):
        return value

    if isinstance(value, (Decimal, str)):
        value = float(value)

    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        return value

    raise TypeError(f"Unsupported MySQL numeric value type: {type(value)!r}")


def normalize_mysql_bool(value: Any) -> Optional[bool]:
    """TINYINT(1) arrives as int (or b'0'/b'1' for BIT columns)."""

    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(bytes(value), "big") != 0
    if isinstance(value, str):
        return value.strip() not in {"", "0", "false", "False"}
    return bool(value)
