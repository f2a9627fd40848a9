from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def minutes_to_hours(minutes: int) -> Decimal:
    return round2(Decimal(int(minutes)) / Decimal(60))


@dataclass(frozen=True)
class WeeklyHours:
    """Worked minutes of one Monday-started week, split at the overtime threshold."""

    week_start: date
    worked_minutes: int
    regular_minutes: int
    overtime_minutes: int

    def to_dict(self) -> dict:
        return {
            "weekStart": self.week_start.isoformat(),
            "workedMinutes": self.worked_minutes,
            "regularMinutes": self.regular_minutes,
            "overtimeMinutes": self.overtime_minutes,
        }


@dataclass(frozen=True)
class PayrollSummary:
    """Computed payroll for one employee and pay period. Never persisted."""

    employee_id: int
    employee_name: str
    pay_period: str
    period_start: date
    period_end: date
    hourly_rate: Decimal
    overtime_rate: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    total_work_hours: Decimal
    total_salary: Decimal
    weeks: tuple[WeeklyHours, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "payPeriod": self.pay_period,
            "hourlyRate": float(self.hourly_rate),
            "overtimeRate": float(self.overtime_rate),
            "regularHours": float(self.regular_hours),
            "overtimeHours": float(self.overtime_hours),
            "totalWorkHours": float(self.total_work_hours),
            "totalSalary": float(self.total_salary),
            "weeks": [w.to_dict() for w in self.weeks],
        }
