from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from fakes import InMemoryEmployees, UnavailableAttendance, alice
from timeclock.core.exceptions import EmployeeNotFoundError, StorageUnavailableError, ValidationError
from timeclock.payroll.service import PayrollService

MONDAY = date(2025, 3, 3)


def work_week(repo, employee_id: int, monday: date, daily_minutes: list[int]) -> None:
    for offset, minutes in enumerate(daily_minutes):
        start = datetime.combine(monday + timedelta(days=offset), datetime.min.time()) + timedelta(hours=8)
        repo.add_closed(employee_id, start, start + timedelta(minutes=minutes))


def test_single_week_with_overtime(payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [540] * 5)  # 45h

    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))

    assert summary.regular_hours == Decimal("40.00")
    assert summary.overtime_hours == Decimal("5.00")
    assert summary.total_work_hours == Decimal("45.00")
    assert summary.hourly_rate == Decimal("20")
    assert summary.overtime_rate == Decimal("30.0")
    assert summary.total_salary == Decimal("950.00")
    assert summary.employee_name == "Alice"
    assert summary.pay_period == "2025-03-03 to 2025-03-09"


def test_overtime_is_per_week_not_per_period(payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [480] * 4 + [360])  # 38h
    work_week(attendance_repo, 1, MONDAY + timedelta(days=7), [480] * 5 + [120])  # 42h

    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=13))

    assert summary.regular_hours == Decimal("78.00")
    assert summary.overtime_hours == Decimal("2.00")
    assert [w.overtime_minutes for w in summary.weeks] == [0, 120]


def test_three_week_period_45_35_45(payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [540] * 5)
    work_week(attendance_repo, 1, MONDAY + timedelta(days=7), [420] * 5)
    work_week(attendance_repo, 1, MONDAY + timedelta(days=14), [540] * 5)

    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=20))

    assert summary.regular_hours == Decimal("115.00")
    assert summary.overtime_hours == Decimal("10.00")
    assert summary.total_work_hours == Decimal("125.00")


@pytest.mark.parametrize(
    "extra_minutes, overtime",
    [(0, Decimal("0.00")), (1, Decimal("0.02"))],
)
def test_weekly_threshold_boundary(payroll, attendance_repo, extra_minutes, overtime):
    work_week(attendance_repo, 1, MONDAY, [480] * 4 + [480 + extra_minutes])  # 2400 (+1) minutes

    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))

    assert summary.regular_hours == Decimal("40.00")
    assert summary.overtime_hours == overtime


def test_no_shifts_yields_zero_summary(payroll):
    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))

    assert summary.regular_hours == Decimal("0.00")
    assert summary.overtime_hours == Decimal("0.00")
    assert summary.total_work_hours == Decimal("0.00")
    assert summary.total_salary == Decimal("0.00")


def test_default_rate_when_employee_has_none(payroll, attendance_repo):
    work_week(attendance_repo, 2, MONDAY, [600] * 5)  # 50h

    summary = payroll.calculate_payroll(2, MONDAY, MONDAY + timedelta(days=6))

    assert summary.hourly_rate == Decimal("15.00")
    assert summary.overtime_rate == Decimal("22.5000")
    assert summary.total_salary == Decimal("825.00")  # 40*15 + 10*22.5


def test_open_and_inverted_shifts_do_not_count(ledger, payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [480])
    attendance_repo.add_closed(1, datetime(2025, 3, 4, 17, 0), datetime(2025, 3, 4, 8, 0))
    ledger.clock_in(1, now=datetime(2025, 3, 5, 8, 0))

    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))

    assert summary.total_work_hours == Decimal("8.00")


def test_query_is_widened_to_whole_weeks(payroll, attendance_repo):
    # Wednesday to the following Tuesday; the Monday before the period still counts.
    work_week(attendance_repo, 1, MONDAY, [600, 600, 600, 600, 600])

    summary = payroll.calculate_payroll(1, date(2025, 3, 5), date(2025, 3, 11))

    _, lower, upper, closed_only = attendance_repo.queries[-1]
    assert lower == datetime(2025, 3, 3)
    assert upper == datetime(2025, 3, 17)
    assert closed_only is True
    assert summary.overtime_hours == Decimal("10.00")
    assert [w.week_start for w in summary.weeks] == [date(2025, 3, 3), date(2025, 3, 10)]


def test_payroll_is_idempotent(payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [545, 480, 500, 530, 610])

    first = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))
    second = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))

    assert first == second


def test_rounding_to_two_decimals(payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [20])  # 0.333.. h

    summary = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6))

    assert summary.regular_hours == Decimal("0.33")
    assert summary.total_salary == Decimal("6.60")
    assert summary.total_work_hours == summary.regular_hours + summary.overtime_hours


def test_unknown_employee_is_hard_error(payroll):
    with pytest.raises(EmployeeNotFoundError):
        payroll.calculate_payroll(42, MONDAY, MONDAY)


def test_storage_failure_is_surfaced():
    service = PayrollService(UnavailableAttendance(), InMemoryEmployees([alice()]))

    with pytest.raises(StorageUnavailableError):
        service.calculate_payroll(1, MONDAY, MONDAY)


def test_start_after_end_is_rejected(payroll):
    with pytest.raises(ValidationError):
        payroll.calculate_payroll(1, MONDAY, MONDAY - timedelta(days=1))


def test_payroll_for_all_employees(payroll, attendance_repo):
    work_week(attendance_repo, 2, MONDAY, [480])

    summaries = payroll.calculate_payroll_for_all(MONDAY, MONDAY + timedelta(days=6))

    assert [s.employee_name for s in summaries] == ["Alice", "Bob", "Carol"]
    assert summaries[1].total_salary == Decimal("120.00")


def test_summary_to_dict(payroll, attendance_repo):
    work_week(attendance_repo, 1, MONDAY, [540] * 5)

    data = payroll.calculate_payroll(1, MONDAY, MONDAY + timedelta(days=6)).to_dict()

    assert data["totalSalary"] == 950.0
    assert data["overtimeRate"] == 30.0
    assert data["weeks"][0]["weekStart"] == "2025-03-03"
