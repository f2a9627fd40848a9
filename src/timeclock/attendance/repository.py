from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceShift


class AttendanceRepository(Protocol):
    """Storage of attendance shifts; the single source of truth for clock state."""

    def get_by_id(self, shift_id: int) -> Optional[AttendanceShift]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceShift]:
        """The employee's shift with no clock-out, whatever its clock-in time."""

        raise NotImplementedError

    def create_open_shift(self, *, employee_id: int, clock_in_time: datetime) -> int:
        """Insert an open shift.

        Raises OpenShiftConflictError when the employee already has one; the
        check must be enforced by storage, not by a prior read.
        """

        raise NotImplementedError

    def close_shift(self, *, shift_id: int, clock_out_time: datetime) -> bool:
        """Close the given shift if it is still open. False when nothing changed."""

        raise NotImplementedError

    def list_for_employee(
        self,
        *,
        employee_id: int,
        start: datetime,
        end: datetime,
        closed_only: bool = False,
    ) -> Sequence[AttendanceShift]:
        """Shifts with ``start <= clock_in_time < end``, newest first."""

        raise NotImplementedError

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[AttendanceShift]:
        """All employees' shifts with ``start <= clock_in_time < end``, newest first."""

        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceShift]:
        raise NotImplementedError

    def count_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError
