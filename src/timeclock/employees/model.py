from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the roster.

    Note: Plain data object (no DB access code).
    An employee without ``rfid_tag`` cannot clock in by RFID; an employee
    without ``hourly_rate`` is paid at the configured default rate.
    """

    employee_id: int
    name: str
    email: str
    rfid_tag: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    department: Optional[str] = None
    position: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "rfidTag": self.rfid_tag,
            "hourlyRate": str(self.hourly_rate) if self.hourly_rate is not None else None,
            "department": self.department,
            "position": self.position,
        }
