"""Seed demo employees with the test RFID tags used by simulate_scan.py."""

from __future__ import annotations

import importlib

from timeclock.config import get_settings_module
from timeclock.container import build_container
from timeclock.core.exceptions import ValidationError

DEMO_EMPLOYEES = [
    {
        "name": "Alice Nguyen",
        "email": "alice@example.com",
        "rfid_tag": "RFID_ALICE123",
        "hourly_rate": "20.00",
        "department": "Engineering",
        "position": "Developer",
    },
    {"name": "Bob Tran", "email": "bob@example.com", "rfid_tag": "RFID_BOB456", "department": "Operations"},
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    for data in DEMO_EMPLOYEES:
        try:
            employee = container.employee_service.create_employee(**data)
            print(f"created {employee.name} (id={employee.employee_id}, tag={employee.rfid_tag})")
        except ValidationError as exc:
            print(f"skipped {data['email']}: {exc}")


if __name__ == "__main__":
    main()
