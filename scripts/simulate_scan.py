"""Publish RFID tags onto the scan channel, as a reader would, and print the outcomes.

Usage: python scripts/simulate_scan.py RFID_ALICE123 [RFID_BOB456 ...]
"""

from __future__ import annotations

import importlib
import sys

from timeclock.config import get_settings_module
from timeclock.container import build_container


def main(tags: list[str]) -> int:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    channel = container.scan_channel

    for tag in tags:
        if not channel.publish(tag):
            print(f"{tag}: ignored (already pending)")

    while True:
        result = channel.process_next()
        if result is None:
            break
        who = result.employee.name if result.employee else result.tag
        print(f"{who}: {result.outcome.value} - {result.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:] or ["RFID_ALICE123", "UNREGISTERED_TAG_EXAMPLE"]))
