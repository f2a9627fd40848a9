from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note (DIP): the ledger and payroll depend on this interface only, never on
    a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_rfid_tag(self, rfid_tag: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        rfid_tag: Optional[str],
        hourly_rate: Optional[Decimal],
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        email: str,
        rfid_tag: Optional[str],
        hourly_rate: Optional[Decimal],
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        """Raises ReferentialIntegrityError when shifts still reference the employee."""

        raise NotImplementedError
