from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import date_arg
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.exceptions import ValidationError
from ..container import Container


def _datetime_field(body: dict, name: str) -> Optional[datetime]:
    raw = body.get(name)
    if not raw:
        return None
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError:
        raise ValidationError(f"'{name}' must be an ISO-8601 timestamp") from None


def register(app: Flask, container: Container) -> None:
    service = container.anomaly_service

    @app.route("/api/shifts/<int:shift_id>/anomaly", methods=["POST"], endpoint="assess_shift")
    def assess_shift(shift_id: int):
        body = request.get_json(silent=True)
        body = body if isinstance(body, dict) else {}
        assessment = service.assess_shift(
            shift_id,
            expected_clock_in=_datetime_field(body, "expectedClockInTime"),
            expected_clock_out=_datetime_field(body, "expectedClockOutTime"),
        )
        return jsonify({"shiftId": shift_id, **assessment.model_dump(by_alias=True)})

    @app.route("/api/employees/<int:employee_id>/anomalies", methods=["GET"], endpoint="employee_anomalies")
    def employee_anomalies(employee_id: int):
        end = date_arg(request.args, "end", now_local().date())
        start = date_arg(request.args, "start", end - timedelta(days=DEFAULT_HISTORY_DAYS - 1))
        flagged = service.flag_anomalies(employee_id, start=start, end=end)
        return jsonify({"employeeId": employee_id, "anomalies": [f.to_dict() for f in flagged]})
