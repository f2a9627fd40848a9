from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ...attendance.model import AttendanceShift
from ...common.datetime_utils import week_start
from ...core.constants import WEEKLY_OVERTIME_THRESHOLD_MINUTES
from ..model import WeeklyHours
from .base import PayrollCalculator

logger = logging.getLogger(__name__)


class WeeklyOvertimeCalculator(PayrollCalculator):
    """Standard rule: minutes beyond the weekly threshold are overtime.

    Shifts are bucketed by the Monday of their clock-in date. Open shifts and
    shifts with a non-positive duration contribute nothing.
    """

    def __init__(self, threshold_minutes: int = WEEKLY_OVERTIME_THRESHOLD_MINUTES):
        self._threshold = int(threshold_minutes)

    @property
    def threshold_minutes(self) -> int:
        return self._threshold

    def worked_minutes(self, shift: AttendanceShift) -> int:
        if shift.clock_out_time is None:
            return 0
        minutes = shift.worked_minutes()
        if minutes <= 0:
            logger.warning(
                "Ignoring shift %s of employee %s: clock-out %s is not after clock-in %s",
                shift.shift_id,
                shift.employee_id,
                shift.clock_out_time.isoformat(),
                shift.clock_in_time.isoformat(),
            )
            return 0
        return minutes

    def weekly_hours(
        self,
        shifts: Iterable[AttendanceShift],
        *,
        weeks: Optional[Sequence[date]] = None,
    ) -> list[WeeklyHours]:
        totals: dict[date, int] = {w: 0 for w in weeks or ()}
        for shift in shifts:
            minutes = self.worked_minutes(shift)
            if minutes <= 0:
                continue
            key = week_start(shift.clock_in_time.date())
            totals[key] = totals.get(key, 0) + minutes

        out = []
        for key in sorted(totals):
            worked = totals[key]
            regular = min(worked, self._threshold)
            out.append(
                WeeklyHours(
                    week_start=key,
                    worked_minutes=worked,
                    regular_minutes=regular,
                    overtime_minutes=worked - regular,
                )
            )
        return out
