from __future__ import annotations

import pytest

from fakes import InMemoryAttendance, InMemoryEmployees, alice, bob, carol
from timeclock.attendance.service import AttendanceLedger
from timeclock.payroll.service import PayrollService


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def employees_repo(attendance_repo) -> InMemoryEmployees:
    return InMemoryEmployees([alice(), bob(), carol()], attendance=attendance_repo)


@pytest.fixture
def ledger(attendance_repo, employees_repo) -> AttendanceLedger:
    return AttendanceLedger(attendance_repo, employees_repo)


@pytest.fixture
def payroll(attendance_repo, employees_repo) -> PayrollService:
    return PayrollService(attendance_repo, employees_repo)
