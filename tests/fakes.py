"""In-memory repositories shared by the test modules."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from timeclock.attendance.model import AttendanceShift
from timeclock.core.exceptions import OpenShiftConflictError, ReferentialIntegrityError, StorageUnavailableError
from timeclock.employees.model import Employee


def alice() -> Employee:
    return Employee(
        employee_id=1,
        name="Alice",
        email="alice@example.com",
        rfid_tag="RFID_ALICE123",
        hourly_rate=Decimal("20"),
        department="Engineering",
        position="Developer",
    )


def bob() -> Employee:
    return Employee(employee_id=2, name="Bob", email="bob@example.com", rfid_tag="RFID_BOB456", department="Operations")


def carol() -> Employee:
    return Employee(employee_id=3, name="Carol", email="carol@example.com", department="Engineering")


class InMemoryEmployees:
    def __init__(self, employees=(), *, attendance: Optional["InMemoryAttendance"] = None):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._next_id = max(self._by_id, default=0) + 1
        self.attendance = attendance

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def get_by_rfid_tag(self, rfid_tag: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.rfid_tag == rfid_tag), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: (e.name, e.employee_id))

    def create(self, *, name, email, rfid_tag, hourly_rate, department=None, position=None) -> int:
        employee_id = self._next_id
        self._next_id += 1
        self._by_id[employee_id] = Employee(employee_id, name, email, rfid_tag, hourly_rate, department, position)
        return employee_id

    def update(self, *, employee_id, name, email, rfid_tag, hourly_rate, department=None, position=None) -> bool:
        if employee_id not in self._by_id:
            return False
        self._by_id[employee_id] = Employee(employee_id, name, email, rfid_tag, hourly_rate, department, position)
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        if self.attendance and self.attendance.count_for_employee(employee_id):
            raise ReferentialIntegrityError("referenced")
        return self._by_id.pop(int(employee_id), None) is not None


class InMemoryAttendance:
    """Enforces one open shift per employee on insert, like the unique index."""

    def __init__(self, shifts=()):
        self.shifts: dict[int, AttendanceShift] = {s.shift_id: s for s in shifts}
        self._next_id = max(self.shifts, default=0) + 1
        self.queries: list[tuple] = []

    def get_by_id(self, shift_id: int) -> Optional[AttendanceShift]:
        return self.shifts.get(int(shift_id))

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceShift]:
        return next((s for s in self.shifts.values() if s.employee_id == employee_id and s.is_open), None)

    def create_open_shift(self, *, employee_id: int, clock_in_time: datetime) -> int:
        if any(s.employee_id == employee_id and s.is_open for s in self.shifts.values()):
            raise OpenShiftConflictError(f"employee {employee_id} has an open shift")
        shift_id = self._next_id
        self._next_id += 1
        self.shifts[shift_id] = AttendanceShift(shift_id, employee_id, clock_in_time)
        return shift_id

    def close_shift(self, *, shift_id: int, clock_out_time: datetime) -> bool:
        shift = self.shifts.get(shift_id)
        if not shift or not shift.is_open:
            return False
        self.shifts[shift_id] = replace(shift, clock_out_time=clock_out_time)
        return True

    def list_for_employee(self, *, employee_id, start, end, closed_only=False):
        self.queries.append((employee_id, start, end, closed_only))
        out = [
            s
            for s in self.shifts.values()
            if s.employee_id == employee_id and start <= s.clock_in_time < end and not (closed_only and s.is_open)
        ]
        return sorted(out, key=lambda s: (s.clock_in_time, s.shift_id), reverse=True)

    def list_between(self, *, start, end):
        out = [s for s in self.shifts.values() if start <= s.clock_in_time < end]
        return sorted(out, key=lambda s: (s.clock_in_time, s.shift_id), reverse=True)

    def list_open(self):
        return sorted((s for s in self.shifts.values() if s.is_open), key=lambda s: s.clock_in_time, reverse=True)

    def count_for_employee(self, employee_id: int) -> int:
        return sum(1 for s in self.shifts.values() if s.employee_id == employee_id)

    def add_closed(self, employee_id: int, clock_in: datetime, clock_out: datetime) -> AttendanceShift:
        shift = AttendanceShift(self._next_id, employee_id, clock_in, clock_out)
        self.shifts[shift.shift_id] = shift
        self._next_id += 1
        return shift


class StaleReadAttendance(InMemoryAttendance):
    """Reads miss the open shift another session just wrote."""

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceShift]:
        return None


class UnavailableEmployees(InMemoryEmployees):
    def get_by_id(self, employee_id: int):
        raise StorageUnavailableError("connection refused")

    def get_by_rfid_tag(self, rfid_tag: str):
        raise StorageUnavailableError("connection refused")


class UnavailableAttendance(InMemoryAttendance):
    def list_for_employee(self, **kwargs):
        raise StorageUnavailableError("connection refused")
