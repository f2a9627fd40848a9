from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        return jsonify({"employees": [e.to_dict() for e in service.list_employees()]})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        body = json_body(request)
        employee = service.create_employee(
            name=body.get("name"),
            email=body.get("email"),
            rfid_tag=body.get("rfidTag"),
            hourly_rate=body.get("hourlyRate"),
            department=body.get("department"),
            position=body.get("position"),
        )
        return jsonify(employee.to_dict()), 201

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return jsonify(service.get_employee(employee_id).to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: int):
        body = json_body(request)
        employee = service.update_employee(
            employee_id,
            name=body.get("name"),
            email=body.get("email"),
            rfid_tag=body.get("rfidTag"),
            hourly_rate=body.get("hourlyRate"),
            department=body.get("department"),
            position=body.get("position"),
        )
        return jsonify(employee.to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        service.delete_employee(employee_id)
        return "", 204
