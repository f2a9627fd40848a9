from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import OpenShiftConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceShift
from .repository import AttendanceRepository

_COLUMNS = "shift_id, employee_id, clock_in_time, clock_out_time"


def _to_shift(row: dict) -> AttendanceShift:
    return AttendanceShift(
        shift_id=int(row["shift_id"]),
        employee_id=int(row["employee_id"]),
        clock_in_time=row["clock_in_time"],
        clock_out_time=row.get("clock_out_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[AttendanceShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_shifts WHERE shift_id=%s", (int(shift_id),))
            row = fetchone(cur)
            return _to_shift(row) if row else None

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_shifts
                WHERE open_employee_id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_shift(row) if row else None

    def create_open_shift(self, *, employee_id: int, clock_in_time: datetime) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO attendance_shifts(employee_id, clock_in_time) VALUES(%s,%s)",
                    (int(employee_id), clock_in_time),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            # uq_attendance_one_open_shift
            if is_duplicate_key(exc):
                raise OpenShiftConflictError(f"Employee {employee_id} already has an open shift") from exc
            raise

    def close_shift(self, *, shift_id: int, clock_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_shifts
                SET clock_out_time=%s
                WHERE shift_id=%s AND clock_out_time IS NULL
                """,
                (clock_out_time, int(shift_id)),
            )
            return cur.rowcount > 0

    def list_for_employee(
        self,
        *,
        employee_id: int,
        start: datetime,
        end: datetime,
        closed_only: bool = False,
    ) -> Sequence[AttendanceShift]:
        clauses = ["employee_id=%s", "clock_in_time >= %s", "clock_in_time < %s"]
        if closed_only:
            clauses.append("clock_out_time IS NOT NULL")
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_shifts
                WHERE {where}
                ORDER BY clock_in_time DESC, shift_id DESC
                """,
                (int(employee_id), start, end),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[AttendanceShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_shifts
                WHERE clock_in_time >= %s AND clock_in_time < %s
                ORDER BY clock_in_time DESC, shift_id DESC
                """,
                (start, end),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_open(self) -> Sequence[AttendanceShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_shifts
                WHERE clock_out_time IS NULL
                ORDER BY clock_in_time DESC
                """
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def count_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM attendance_shifts WHERE employee_id=%s", (int(employee_id),))
            row = cur.fetchone()
            return int(row[0]) if row else 0
