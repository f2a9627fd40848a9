from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import date_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/payroll", methods=["GET"], endpoint="employee_payroll")
    def employee_payroll(employee_id: int):
        start = date_arg(request.args, "start")
        end = date_arg(request.args, "end")
        summary = container.payroll_service.calculate_payroll(employee_id, start, end)
        return jsonify(summary.to_dict())

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_run")
    def payroll_run():
        start = date_arg(request.args, "start")
        end = date_arg(request.args, "end")
        summaries = container.payroll_service.calculate_payroll_for_all(start, end)
        return jsonify({"payPeriod": f"{start.isoformat()} to {end.isoformat()}", "summaries": [s.to_dict() for s in summaries]})
