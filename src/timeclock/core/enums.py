from __future__ import annotations

from enum import Enum


class ShiftStatus(str, Enum):
    """Clock state of a shift, derived from whether it has a clock-out."""

    CLOCKED_IN = "clocked_in"
    CLOCKED_OUT = "clocked_out"


class ClockOutcome(str, Enum):
    """Result kinds of a ledger transition or RFID scan."""

    CLOCKED_IN = "CLOCKED_IN"
    CLOCKED_OUT = "CLOCKED_OUT"
    ALREADY_CLOCKED_IN = "ALREADY_CLOCKED_IN"
    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
    TAG_NOT_REGISTERED = "TAG_NOT_REGISTERED"
    SCAN_IN_PROGRESS = "SCAN_IN_PROGRESS"

    @property
    def accepted(self) -> bool:
        return self in (ClockOutcome.CLOCKED_IN, ClockOutcome.CLOCKED_OUT)
