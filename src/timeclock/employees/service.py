from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_positive_rate, optional_tag, optional_text, require_email, require_non_empty
from ..core.constants import (
    DEPARTMENT_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    POSITION_MAX_LENGTH,
    RFID_TAG_MAX_LENGTH,
)
from ..core.exceptions import EmployeeNotFoundError, ReferentialIntegrityError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _clean_fields(*, name, email, rfid_tag, hourly_rate, department, position) -> dict:
    return {
        "name": require_non_empty(name, "Name", NAME_MAX_LENGTH),
        "email": require_email(email, max_length=EMAIL_MAX_LENGTH),
        "rfid_tag": optional_tag(rfid_tag, RFID_TAG_MAX_LENGTH),
        "hourly_rate": optional_positive_rate(hourly_rate),
        "department": optional_text(department, "Department", DEPARTMENT_MAX_LENGTH),
        "position": optional_text(position, "Position", POSITION_MAX_LENGTH),
    }


class EmployeeService:
    """Use case: manage the employee roster (admin)."""

    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository):
        self._employees = employees
        self._attendance = attendance

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def _check_unique(self, *, email: str, rfid_tag: Optional[str], employee_id: Optional[int] = None) -> None:
        other = self._employees.get_by_email(email)
        if other and other.employee_id != employee_id:
            raise ValidationError("Email is already registered")
        if rfid_tag:
            other = self._employees.get_by_rfid_tag(rfid_tag)
            if other and other.employee_id != employee_id:
                raise ValidationError(f"RFID tag {rfid_tag!r} is already assigned to {other.name}")

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        rfid_tag: Optional[str] = None,
        hourly_rate=None,
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> Employee:
        fields = _clean_fields(
            name=name,
            email=email,
            rfid_tag=rfid_tag,
            hourly_rate=hourly_rate,
            department=department,
            position=position,
        )
        self._check_unique(email=fields["email"], rfid_tag=fields["rfid_tag"])

        employee_id = self._employees.create(**fields)
        logger.info("Employee %s created (%s)", employee_id, fields["email"])
        return Employee(employee_id=employee_id, **fields)

    def update_employee(
        self,
        employee_id: int,
        *,
        name: str,
        email: str,
        rfid_tag: Optional[str] = None,
        hourly_rate=None,
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> Employee:
        current = self.get_employee(employee_id)
        fields = _clean_fields(
            name=name,
            email=email,
            rfid_tag=rfid_tag,
            hourly_rate=hourly_rate,
            department=department,
            position=position,
        )
        self._check_unique(email=fields["email"], rfid_tag=fields["rfid_tag"], employee_id=current.employee_id)

        # MySQL reports 0 affected rows for an unchanged row, so the result is not checked.
        self._employees.update(employee_id=current.employee_id, **fields)
        return Employee(employee_id=current.employee_id, **fields)

    def delete_employee(self, employee_id: int) -> None:
        employee = self.get_employee(employee_id)
        if self._attendance.count_for_employee(employee.employee_id) > 0:
            raise ReferentialIntegrityError(
                f"Employee {employee.name!r} has attendance records that must be deleted first"
            )
        if not self._employees.delete_by_id(employee.employee_id):
            raise EmployeeNotFoundError(f"Employee {employee_id} does not exist")
        logger.info("Employee %s deleted", employee.employee_id)
