from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional, Sequence

from ...attendance.model import AttendanceShift
from ..model import WeeklyHours


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, shift: AttendanceShift) -> int:
        raise NotImplementedError

    @abstractmethod
    def weekly_hours(
        self,
        shifts: Iterable[AttendanceShift],
        *,
        weeks: Optional[Sequence[date]] = None,
    ) -> list[WeeklyHours]:
        raise NotImplementedError
