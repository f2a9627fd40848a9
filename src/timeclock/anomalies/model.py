from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from ..attendance.model import AttendanceShift


class AnomalyAssessmentRequest(BaseModel):
    """Input sent to the reasoning service. Times are ISO-8601 strings."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    employee_id: str = Field(alias="employeeId")
    clock_in_time: str = Field(alias="clockInTime")
    clock_out_time: str = Field(alias="clockOutTime")
    expected_clock_in_time: str = Field(alias="expectedClockInTime")
    expected_clock_out_time: str = Field(alias="expectedClockOutTime")


class AnomalyAssessment(BaseModel):
    """Schema the service output must satisfy."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_anomaly: StrictBool = Field(alias="isAnomaly")
    anomaly_explanation: StrictStr = Field(alias="anomalyExplanation")


@dataclass(frozen=True)
class FlaggedShift:
    shift: AttendanceShift
    assessment: AnomalyAssessment

    def to_dict(self) -> dict:
        return {"shift": self.shift.to_dict(), **self.assessment.model_dump(by_alias=True)}
