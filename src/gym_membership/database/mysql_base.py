from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

_CONNECTIVITY_ERRORS = (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One transaction: commit on success, rollback on any error.

    Connectivity failures flag the store handle and surface as StoreUnavailableError.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        conn_factory.mark_unavailable(e)
        raise StoreUnavailableError("Service unavailable: database not connected") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _CONNECTIVITY_ERRORS as e:
        _safe_rollback(conn)
        conn_factory.mark_unavailable(e)
        raise StoreUnavailableError("Service unavailable: database not connected") from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        # Connection already gone; nothing left to roll back.
        pass


def is_duplicate_key(error: Exception) -> bool:
    return isinstance(error, mysql.connector.errors.IntegrityError) and error.errno == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_decimal(value: Any) -> Decimal:
    """DECIMAL columns come back as Decimal, but tolerate float/str from other drivers."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
