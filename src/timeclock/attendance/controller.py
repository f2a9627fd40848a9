from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import date_arg, json_body
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import ClockOutcome
from ..container import Container
from .model import ClockResult


def _status_for(result: ClockResult) -> int:
    if result.accepted:
        return 200
    if result.outcome == ClockOutcome.TAG_NOT_REGISTERED:
        return 404
    return 409


def register(app: Flask, container: Container) -> None:
    def respond(result: ClockResult):
        return jsonify(result.to_dict()), _status_for(result)

    @app.route("/api/rfid/scan", methods=["POST"], endpoint="rfid_scan")
    def rfid_scan():
        body = json_body(request)
        tag = str(body.get("tag") or "")
        return respond(container.scan_channel.submit_scan(tag))

    @app.route("/api/employees/<int:employee_id>/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in(employee_id: int):
        return respond(container.ledger.clock_in(employee_id, now=now_local()))

    @app.route("/api/employees/<int:employee_id>/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out(employee_id: int):
        return respond(container.ledger.clock_out(employee_id, now=now_local()))

    @app.route("/api/employees/<int:employee_id>/open-shift", methods=["GET"], endpoint="open_shift")
    def open_shift(employee_id: int):
        container.employee_service.get_employee(employee_id)
        shift = container.ledger.get_open_shift(employee_id)
        return jsonify({"employeeId": employee_id, "shift": shift.to_dict() if shift else None})

    @app.route("/api/employees/<int:employee_id>/shifts", methods=["GET"], endpoint="shift_history")
    def shift_history(employee_id: int):
        today = now_local().date()
        end = date_arg(request.args, "end", today)
        start = date_arg(request.args, "start", end - timedelta(days=DEFAULT_HISTORY_DAYS - 1))
        shifts = container.ledger.list_shifts(employee_id, start=start, end=end)
        return jsonify({"employeeId": employee_id, "shifts": [s.to_dict() for s in shifts]})

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_board")
    def attendance_board():
        end = date_arg(request.args, "end", now_local().date())
        start = date_arg(request.args, "start", end.replace(day=1))
        listings = container.ledger.list_all_shifts(
            start,
            end,
            department=request.args.get("department"),
            search=request.args.get("search"),
        )
        return jsonify({"start": start.isoformat(), "end": end.isoformat(), "shifts": [s.to_dict() for s in listings]})

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        day = date_arg(request.args, "day", now_local().date())
        return jsonify(container.ledger.daily_stats(day).to_dict())

    @app.route("/api/attendance/open", methods=["GET"], endpoint="open_shifts")
    def open_shifts():
        return jsonify({"shifts": [s.to_dict() for s in container.ledger.list_open_shifts()]})
