from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, now_local, parse_hhmm
from ..common.validators import require_date_range
from ..core.constants import DEFAULT_LATE_AFTER
from ..core.enums import ClockOutcome
from ..core.exceptions import EmployeeNotFoundError, OpenShiftConflictError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import AttendanceShift, ClockResult, DailyStats, ShiftListing
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Resolves RFID tags and moves employees between clocked-out and clocked-in.

    Per employee: ClockedOut --clock_in--> ClockedIn --clock_out--> ClockedOut.
    Any other transition comes back as a rejected ``ClockResult``. Storage
    errors propagate as ``StorageUnavailableError`` and are never reported as
    an unknown tag.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        late_after: str = DEFAULT_LATE_AFTER,
    ):
        self._attendance = attendance
        self._employees = employees
        self._late_after = parse_hhmm(late_after)

    def resolve_employee(self, tag: str) -> Optional[Employee]:
        """Exact-match lookup on the RFID tag. None means the tag is not registered."""
        tag = (tag or "").strip()
        if not tag:
            return None
        return self._employees.get_by_rfid_tag(tag)

    def get_open_shift(self, employee_id: int) -> Optional[AttendanceShift]:
        # Clock-in order is not trusted here: wall-clock time can step back.
        return self._attendance.get_open_for_employee(int(employee_id))

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def clock_in(self, employee_id: int, *, now: Optional[datetime] = None) -> ClockResult:
        now = now or now_local()
        employee = self._require_employee(employee_id)

        open_shift = self.get_open_shift(employee.employee_id)
        if open_shift:
            logger.info("Clock-in rejected: employee %s already clocked in (shift %s)", employee.employee_id, open_shift.shift_id)
            return ClockResult(ClockOutcome.ALREADY_CLOCKED_IN, shift=open_shift, employee=employee)

        try:
            shift_id = self._attendance.create_open_shift(employee_id=employee.employee_id, clock_in_time=now)
        except OpenShiftConflictError:
            # Another session opened a shift between our read and our insert.
            logger.info("Clock-in rejected by storage: employee %s already has an open shift", employee.employee_id)
            return ClockResult(
                ClockOutcome.ALREADY_CLOCKED_IN,
                shift=self.get_open_shift(employee.employee_id),
                employee=employee,
            )

        shift = AttendanceShift(shift_id=shift_id, employee_id=employee.employee_id, clock_in_time=now)
        logger.info("Employee %s clocked in at %s (shift %s)", employee.employee_id, now.isoformat(), shift_id)
        return ClockResult(ClockOutcome.CLOCKED_IN, shift=shift, employee=employee)

    def clock_out(self, employee_id: int, *, now: Optional[datetime] = None) -> ClockResult:
        now = now or now_local()
        employee = self._require_employee(employee_id)

        open_shift = self.get_open_shift(employee.employee_id)
        if not open_shift:
            logger.info("Clock-out rejected: employee %s is not clocked in", employee.employee_id)
            return ClockResult(ClockOutcome.NOT_CLOCKED_IN, employee=employee)

        if not self._attendance.close_shift(shift_id=open_shift.shift_id, clock_out_time=now):
            # Closed by a concurrent request after we read it.
            logger.info("Clock-out rejected: shift %s was already closed", open_shift.shift_id)
            return ClockResult(ClockOutcome.NOT_CLOCKED_IN, employee=employee)

        shift = open_shift.closed_at(now)
        logger.info(
            "Employee %s clocked out at %s (shift %s, %s min)",
            employee.employee_id,
            now.isoformat(),
            shift.shift_id,
            shift.worked_minutes(),
        )
        return ClockResult(ClockOutcome.CLOCKED_OUT, shift=shift, employee=employee)

    def handle_scan(self, tag: str, *, now: Optional[datetime] = None) -> ClockResult:
        """Toggle the clock state of whoever owns ``tag``."""
        now = now or now_local()
        employee = self.resolve_employee(tag)
        if not employee:
            logger.warning("Unknown RFID tag scanned: %r", tag)
            return ClockResult(ClockOutcome.TAG_NOT_REGISTERED, tag=tag)

        if self.get_open_shift(employee.employee_id):
            result = self.clock_out(employee.employee_id, now=now)
        else:
            result = self.clock_in(employee.employee_id, now=now)
        return ClockResult(result.outcome, shift=result.shift, employee=result.employee, tag=tag)

    def list_shifts(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceShift]:
        """Shifts clocked in between ``start`` and ``end`` (inclusive), newest first."""
        require_date_range(start, end)
        employee = self._require_employee(employee_id)
        lower, upper = day_bounds(start, end)
        return self._attendance.list_for_employee(employee_id=employee.employee_id, start=lower, end=upper)

    def list_open_shifts(self) -> Sequence[AttendanceShift]:
        return self._attendance.list_open()

    def list_all_shifts(
        self,
        start: date,
        end: date,
        *,
        department: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[ShiftListing]:
        """Every employee's shifts clocked in between ``start`` and ``end``, newest first.

        ``department`` must match exactly; ``search`` is a case-insensitive
        substring of the employee name.
        """
        require_date_range(start, end)
        lower, upper = day_bounds(start, end)
        roster = {e.employee_id: e for e in self._employees.list_all()}
        department = (department or "").strip() or None
        needle = (search or "").strip().lower()

        listings = []
        for shift in self._attendance.list_between(start=lower, end=upper):
            employee = roster.get(shift.employee_id)
            listing = ShiftListing(
                shift=shift,
                employee_name=employee.name if employee else "Unknown",
                department=employee.department if employee else None,
            )
            if department and listing.department != department:
                continue
            if needle and needle not in listing.employee_name.lower():
                continue
            listings.append(listing)
        return listings

    def daily_stats(self, day: date) -> DailyStats:
        lower, upper = day_bounds(day, day)
        shifts = self._attendance.list_between(start=lower, end=upper)
        total = len(self._employees.list_all())
        present = len({s.employee_id for s in shifts})
        cutoff = (self._late_after.hour, self._late_after.minute)
        late = sum(1 for s in shifts if (s.clock_in_time.hour, s.clock_in_time.minute) > cutoff)
        return DailyStats(day=day, total_employees=total, present=present, absent=max(total - present, 0), late=late)
