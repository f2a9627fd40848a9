"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib
from datetime import date

from timeclock.config import get_settings_module
from timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    print(container.ledger.handle_scan("RFID_ALICE123").to_dict())
    summary = container.payroll_service.calculate_payroll(1, date(2025, 1, 1), date(2025, 1, 31))
    print(summary.to_dict())


if __name__ == "__main__":
    main()
