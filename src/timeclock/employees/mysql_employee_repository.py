from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ReferentialIntegrityError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, is_row_referenced
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, email, rfid_tag, hourly_rate, department, position"


def _to_employee(row: dict) -> Employee:
    rate = row.get("hourly_rate")
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        email=row["email"],
        rfid_tag=row.get("rfid_tag"),
        hourly_rate=Decimal(str(rate)) if rate is not None else None,
        department=row.get("department"),
        position=row.get("position"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_one("employee_id", int(employee_id))

    def get_by_rfid_tag(self, rfid_tag: str) -> Optional[Employee]:
        return self._get_one("rfid_tag", rfid_tag)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name, employee_id")
            return [_to_employee(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        email: str,
        rfid_tag: Optional[str],
        hourly_rate: Optional[Decimal],
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(name, email, rfid_tag, hourly_rate, department, position)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (name, email, rfid_tag, hourly_rate, department, position),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ValidationError("Email or RFID tag is already registered") from exc
            raise

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        email: str,
        rfid_tag: Optional[str],
        hourly_rate: Optional[Decimal],
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, email=%s, rfid_tag=%s, hourly_rate=%s, department=%s, position=%s
                    WHERE employee_id=%s
                    """,
                    (name, email, rfid_tag, hourly_rate, department, position, int(employee_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ValidationError("Email or RFID tag is already registered") from exc
            raise

    def delete_by_id(self, employee_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as exc:
            if is_row_referenced(exc):
                raise ReferentialIntegrityError(
                    "Employee has attendance records that must be deleted first"
                ) from exc
            raise
