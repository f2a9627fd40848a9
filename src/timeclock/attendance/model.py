from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import ClockOutcome, ShiftStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceShift:
    """Domain entity: one clock-in/clock-out pair.

    ``status`` is derived from ``clock_out_time`` and never stored.
    """

    shift_id: int
    employee_id: int
    clock_in_time: datetime
    clock_out_time: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out_time is None

    @property
    def status(self) -> ShiftStatus:
        return ShiftStatus.CLOCKED_IN if self.is_open else ShiftStatus.CLOCKED_OUT

    def worked_minutes(self) -> int:
        """Whole minutes between clock-in and clock-out; 0 while open."""
        if self.clock_out_time is None:
            return 0
        return int((self.clock_out_time - self.clock_in_time).total_seconds() // 60)

    def duration_minutes(self) -> Optional[int]:
        if self.clock_out_time is None:
            return None
        return round((self.clock_out_time - self.clock_in_time).total_seconds() / 60)

    def closed_at(self, clock_out_time: datetime) -> "AttendanceShift":
        return replace(self, clock_out_time=clock_out_time)

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "employeeId": self.employee_id,
            "clockInTime": self.clock_in_time.isoformat(),
            "clockOutTime": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "status": self.status.value,
            "durationMinutes": self.duration_minutes(),
        }


_MESSAGES = {
    ClockOutcome.CLOCKED_IN: "Clocked in",
    ClockOutcome.CLOCKED_OUT: "Clocked out",
    ClockOutcome.ALREADY_CLOCKED_IN: "Already clocked in",
    ClockOutcome.NOT_CLOCKED_IN: "Not clocked in",
    ClockOutcome.TAG_NOT_REGISTERED: "RFID tag is not registered. Please contact an administrator.",
    ClockOutcome.SCAN_IN_PROGRESS: "This tag is already being processed",
}


@dataclass(frozen=True)
class ClockResult:
    """Typed outcome of a clock transition (accepted or rejected)."""

    outcome: ClockOutcome
    shift: Optional[AttendanceShift] = None
    employee: Optional[Employee] = None
    tag: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted

    @property
    def message(self) -> str:
        return _MESSAGES[self.outcome]

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "accepted": self.accepted,
            "message": self.message,
            "tag": self.tag,
            "employee": self.employee.to_dict() if self.employee else None,
            "shift": self.shift.to_dict() if self.shift else None,
        }


@dataclass(frozen=True)
class ShiftListing:
    """A shift joined with the owner's roster details, for the attendance board."""

    shift: AttendanceShift
    employee_name: str
    department: Optional[str] = None

    def to_dict(self) -> dict:
        return {**self.shift.to_dict(), "employeeName": self.employee_name, "department": self.department}


@dataclass(frozen=True)
class DailyStats:
    day: date
    total_employees: int
    present: int
    absent: int
    late: int

    def to_dict(self) -> dict:
        return {
            "day": self.day.isoformat(),
            "totalEmployees": self.total_employees,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
        }
