from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import week_bounds
from ..common.validators import require_date_range
from ..core.constants import DEFAULT_HOURLY_RATE, OVERTIME_MULTIPLIER
from ..core.exceptions import EmployeeNotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.weekly_overtime_calculator import WeeklyOvertimeCalculator
from .model import PayrollSummary, minutes_to_hours, round2

logger = logging.getLogger(__name__)


def format_pay_period(start: date, end: date) -> str:
    return f"{start.isoformat()} to {end.isoformat()}"


class PayrollService:
    """Read-only payroll over closed attendance shifts.

    Every call recomputes from storage; nothing is cached between requests.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        default_hourly_rate: Decimal = DEFAULT_HOURLY_RATE,
        overtime_multiplier: Decimal = OVERTIME_MULTIPLIER,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or WeeklyOvertimeCalculator()
        self._default_rate = Decimal(str(default_hourly_rate))
        self._multiplier = Decimal(str(overtime_multiplier))

    def calculate_payroll(self, employee_id: int, start_date: date, end_date: date) -> PayrollSummary:
        require_date_range(start_date, end_date)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFoundError(f"Cannot price unknown employee {employee_id}")
        return self._summarize(employee, start_date, end_date)

    def calculate_payroll_for_all(self, start_date: date, end_date: date) -> list[PayrollSummary]:
        require_date_range(start_date, end_date)
        summaries = [self._summarize(e, start_date, end_date) for e in self._employees.list_all()]
        summaries.sort(key=lambda s: (s.employee_name.lower(), s.employee_id))
        return summaries

    def _summarize(self, employee: Employee, start_date: date, end_date: date) -> PayrollSummary:
        hourly_rate = employee.hourly_rate if employee.hourly_rate is not None else self._default_rate
        overtime_rate = hourly_rate * self._multiplier

        # Whole weeks, so a shift near the period edge lands in its own week.
        lower, upper = week_bounds(start_date, end_date)
        shifts = self._attendance.list_for_employee(
            employee_id=employee.employee_id,
            start=lower,
            end=upper,
            closed_only=True,
        )

        week_starts = []
        cursor = lower.date()
        while cursor < upper.date():
            week_starts.append(cursor)
            cursor += timedelta(days=7)
        weeks = self._calculator.weekly_hours(shifts, weeks=week_starts)

        regular_minutes = sum(w.regular_minutes for w in weeks)
        overtime_minutes = sum(w.overtime_minutes for w in weeks)
        regular_hours = minutes_to_hours(regular_minutes)
        overtime_hours = minutes_to_hours(overtime_minutes)

        summary = PayrollSummary(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            pay_period=format_pay_period(start_date, end_date),
            period_start=start_date,
            period_end=end_date,
            hourly_rate=hourly_rate,
            overtime_rate=overtime_rate,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            total_work_hours=round2(regular_hours + overtime_hours),
            total_salary=round2(regular_hours * hourly_rate + overtime_hours * overtime_rate),
            weeks=tuple(weeks),
        )
        logger.debug(
            "Payroll for employee %s %s: %s regular h, %s overtime h, salary %s",
            employee.employee_id,
            summary.pay_period,
            regular_hours,
            overtime_hours,
            summary.total_salary,
        )
        return summary
