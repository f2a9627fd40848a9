from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import httpx

from .anomalies.client import AnomalyAssessmentClient
from .anomalies.service import AnomalyDetectionService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.scanner import ScanChannel
from .attendance.service import AttendanceLedger
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.calculator.weekly_overtime_calculator import WeeklyOvertimeCalculator
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    ledger: AttendanceLedger
    scan_channel: ScanChannel
    payroll_service: PayrollService
    anomaly_service: AnomalyDetectionService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    settings: object = None,
    conn: Optional[DatabaseConnection] = None,
    anomaly_transport: Optional[httpx.BaseTransport] = None,
) -> Container:
    """Wire services over the given repositories using values from ``settings``."""

    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    ledger = AttendanceLedger(
        attendance_repo,
        employees_repo,
        late_after=str(setting("LATE_AFTER", constants.DEFAULT_LATE_AFTER)),
    )
    calculator = WeeklyOvertimeCalculator(
        int(setting("WEEKLY_OVERTIME_THRESHOLD_MINUTES", constants.WEEKLY_OVERTIME_THRESHOLD_MINUTES))
    )
    payroll_service = PayrollService(
        attendance_repo,
        employees_repo,
        calculator=calculator,
        default_hourly_rate=Decimal(str(setting("DEFAULT_HOURLY_RATE", constants.DEFAULT_HOURLY_RATE))),
        overtime_multiplier=Decimal(str(setting("OVERTIME_MULTIPLIER", constants.OVERTIME_MULTIPLIER))),
    )
    anomaly_client = AnomalyAssessmentClient(
        str(setting("ANOMALY_SERVICE_URL", "http://localhost:8400")),
        model=str(setting("ANOMALY_MODEL", "attendance-anomaly")),
        timeout=float(setting("ANOMALY_SERVICE_TIMEOUT", 10.0)),
        transport=anomaly_transport,
    )
    anomaly_service = AnomalyDetectionService(
        anomaly_client,
        attendance_repo,
        employees_repo,
        expected_clock_in=str(setting("EXPECTED_CLOCK_IN", constants.DEFAULT_EXPECTED_CLOCK_IN)),
        expected_clock_out=str(setting("EXPECTED_CLOCK_OUT", constants.DEFAULT_EXPECTED_CLOCK_OUT)),
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=EmployeeService(employees_repo, attendance_repo),
        ledger=ledger,
        scan_channel=ScanChannel(ledger),
        payroll_service=payroll_service,
        anomaly_service=anomaly_service,
    )


def build_container(*, db_config: dict, settings: object = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings=settings,
        conn=conn,
    )
