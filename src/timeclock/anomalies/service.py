from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional

from pydantic import ValidationError as SchemaValidationError

from ..attendance.model import AttendanceShift
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import day_bounds, parse_hhmm, to_iso
from ..common.validators import require_date_range
from ..core.constants import (
    ANOMALY_EXCEPTION_PREFIX,
    ANOMALY_INVALID_OUTPUT,
    ANOMALY_MISSING_OUTPUT,
    DEFAULT_EXPECTED_CLOCK_IN,
    DEFAULT_EXPECTED_CLOCK_OUT,
)
from ..core.exceptions import AssessmentServiceError, EmployeeNotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .client import AnomalyAssessmentClient
from .model import AnomalyAssessment, AnomalyAssessmentRequest, FlaggedShift

logger = logging.getLogger(__name__)


def flagged(explanation: str) -> AnomalyAssessment:
    return AnomalyAssessment(is_anomaly=True, anomaly_explanation=explanation)


class AnomalyDetectionService:
    """Forwards shifts to the reasoning service and validates what comes back.

    Any failure (transport error, missing output, output that does not match
    the schema) yields a flagged assessment instead of an exception.
    """

    def __init__(
        self,
        client: AnomalyAssessmentClient,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        expected_clock_in: str = DEFAULT_EXPECTED_CLOCK_IN,
        expected_clock_out: str = DEFAULT_EXPECTED_CLOCK_OUT,
    ):
        self._client = client
        self._attendance = attendance
        self._employees = employees
        self._expected_in: time = parse_hhmm(expected_clock_in)
        self._expected_out: time = parse_hhmm(expected_clock_out)

    def assess(self, request: AnomalyAssessmentRequest) -> AnomalyAssessment:
        try:
            output = self._client.assess(request)
        except AssessmentServiceError as exc:
            logger.error("Anomaly assessment failed for employee %s: %s", request.employee_id, exc)
            return flagged(f"{ANOMALY_EXCEPTION_PREFIX} {exc}")

        # Empty containers still go through schema validation.
        if not output and not isinstance(output, (dict, list)):
            logger.error("Anomaly assessment for employee %s returned no output", request.employee_id)
            return flagged(ANOMALY_MISSING_OUTPUT)

        try:
            return AnomalyAssessment.model_validate(output)
        except SchemaValidationError as exc:
            logger.error("Anomaly output failed schema validation: %s; raw output: %r", exc, output)
            return flagged(ANOMALY_INVALID_OUTPUT)

    def build_request(
        self,
        shift: AttendanceShift,
        *,
        expected_clock_in: Optional[datetime] = None,
        expected_clock_out: Optional[datetime] = None,
    ) -> AnomalyAssessmentRequest:
        if shift.clock_out_time is None:
            raise ValidationError(f"Shift {shift.shift_id} is still open")
        work_day = shift.clock_in_time.date()
        return AnomalyAssessmentRequest(
            employee_id=str(shift.employee_id),
            clock_in_time=to_iso(shift.clock_in_time),
            clock_out_time=to_iso(shift.clock_out_time),
            expected_clock_in_time=to_iso(expected_clock_in or datetime.combine(work_day, self._expected_in)),
            expected_clock_out_time=to_iso(expected_clock_out or datetime.combine(work_day, self._expected_out)),
        )

    def assess_shift(
        self,
        shift_id: int,
        *,
        expected_clock_in: Optional[datetime] = None,
        expected_clock_out: Optional[datetime] = None,
    ) -> AnomalyAssessment:
        shift = self._attendance.get_by_id(int(shift_id))
        if not shift:
            raise ValidationError(f"Shift {shift_id} does not exist")
        request = self.build_request(shift, expected_clock_in=expected_clock_in, expected_clock_out=expected_clock_out)
        return self.assess(request)

    def flag_anomalies(self, employee_id: int, *, start: date, end: date) -> list[FlaggedShift]:
        """Assess every closed shift in the range; keep only the flagged ones."""
        require_date_range(start, end)
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(f"Employee {employee_id} does not exist")

        lower, upper = day_bounds(start, end)
        shifts = self._attendance.list_for_employee(
            employee_id=int(employee_id),
            start=lower,
            end=upper,
            closed_only=True,
        )
        results = []
        for shift in shifts:
            assessment = self.assess(self.build_request(shift))
            if assessment.is_anomaly:
                results.append(FlaggedShift(shift=shift, assessment=assessment))
        return results
