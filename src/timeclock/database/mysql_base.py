from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StorageUnavailableError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` for one unit of work.

    Commits when the block exits cleanly and rolls back otherwise. Driver
    failures surface as ``StorageUnavailableError``, except that rejected values
    (``DataError``) become ``ValidationError``. ``IntegrityError`` is
    re-raised untouched so repositories can map constraint violations.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StorageUnavailableError(f"Database connection failed: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        _rollback(conn)
        raise
    except mysql.connector.DataError as exc:
        # value too long or out of range for its column
        _rollback(conn)
        raise ValidationError(f"Value rejected by storage: {exc.msg}") from exc
    except mysql.connector.Error as exc:
        _rollback(conn)
        raise StorageUnavailableError(f"Database operation failed: {exc}") from exc
    except Exception:
        _rollback(conn)
        raise
    finally:
        conn.close()


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        # connection already gone; the server discards the transaction
        logger.warning("Rollback failed on a broken connection", exc_info=True)


def is_duplicate_key(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def is_row_referenced(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) in (errorcode.ER_ROW_IS_REFERENCED, errorcode.ER_ROW_IS_REFERENCED_2)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
