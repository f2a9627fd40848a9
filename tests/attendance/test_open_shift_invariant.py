from __future__ import annotations

from datetime import datetime, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from fakes import InMemoryAttendance, InMemoryEmployees, alice, bob, carol
from timeclock.attendance.service import AttendanceLedger
from timeclock.core.enums import ClockOutcome

START = datetime(2025, 1, 6, 7, 0)

operations = st.lists(
    st.tuples(st.sampled_from(["in", "out", "scan"]), st.sampled_from([1, 2, 3])),
    max_size=60,
)


@settings(max_examples=200, deadline=None)
@given(ops=operations)
def test_at_most_one_open_shift_per_employee(ops):
    attendance = InMemoryAttendance()
    ledger = AttendanceLedger(attendance, InMemoryEmployees([alice(), bob(), carol()]))
    tags = {1: "RFID_ALICE123", 2: "RFID_BOB456", 3: "no-tag"}
    clocked_in: set[int] = set()

    for step, (op, employee_id) in enumerate(ops):
        now = START + timedelta(minutes=17 * step)
        if op == "in":
            result = ledger.clock_in(employee_id, now=now)
        elif op == "out":
            result = ledger.clock_out(employee_id, now=now)
        else:
            result = ledger.handle_scan(tags[employee_id], now=now)

        if result.outcome == ClockOutcome.CLOCKED_IN:
            assert employee_id not in clocked_in
            clocked_in.add(employee_id)
        elif result.outcome == ClockOutcome.CLOCKED_OUT:
            assert employee_id in clocked_in
            clocked_in.discard(employee_id)
        elif result.outcome == ClockOutcome.ALREADY_CLOCKED_IN:
            assert employee_id in clocked_in
        elif result.outcome == ClockOutcome.NOT_CLOCKED_IN:
            assert employee_id not in clocked_in
        else:
            assert result.outcome == ClockOutcome.TAG_NOT_REGISTERED
            assert employee_id == 3

        for eid in (1, 2, 3):
            open_count = sum(1 for s in attendance.shifts.values() if s.employee_id == eid and s.is_open)
            assert open_count <= 1
            assert (open_count == 1) == (eid in clocked_in)

    assert all(s.clock_out_time is None or s.clock_out_time > s.clock_in_time for s in attendance.shifts.values())
