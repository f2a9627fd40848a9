from datetime import date, datetime

from timeclock.attendance.model import AttendanceShift
from timeclock.payroll.calculator.weekly_overtime_calculator import WeeklyOvertimeCalculator


def _shift(shift_id, start, end):
    return AttendanceShift(shift_id=shift_id, employee_id=1, clock_in_time=start, clock_out_time=end)


def test_worked_minutes_ignores_open_and_negative_shifts():
    calc = WeeklyOvertimeCalculator()

    assert calc.worked_minutes(_shift(1, datetime(2025, 3, 3, 8), None)) == 0
    assert calc.worked_minutes(_shift(2, datetime(2025, 3, 3, 17), datetime(2025, 3, 3, 8))) == 0
    assert calc.worked_minutes(_shift(3, datetime(2025, 3, 3, 8), datetime(2025, 3, 3, 8))) == 0
    assert calc.worked_minutes(_shift(4, datetime(2025, 3, 3, 8), datetime(2025, 3, 3, 12, 15))) == 255


def test_weeks_start_on_monday_and_split_at_threshold():
    calc = WeeklyOvertimeCalculator(threshold_minutes=600)
    shifts = [
        _shift(1, datetime(2025, 3, 9, 8), datetime(2025, 3, 9, 16)),  # Sunday: week of Mar 3
        _shift(2, datetime(2025, 3, 10, 8), datetime(2025, 3, 10, 16)),  # Monday: week of Mar 10
        _shift(3, datetime(2025, 3, 11, 8), datetime(2025, 3, 11, 12)),
    ]

    weeks = calc.weekly_hours(shifts)

    assert [w.week_start for w in weeks] == [date(2025, 3, 3), date(2025, 3, 10)]
    assert (weeks[0].regular_minutes, weeks[0].overtime_minutes) == (480, 0)
    assert (weeks[1].worked_minutes, weeks[1].regular_minutes, weeks[1].overtime_minutes) == (720, 600, 120)


def test_overnight_shift_counts_in_clock_in_week():
    calc = WeeklyOvertimeCalculator()
    weeks = calc.weekly_hours([_shift(1, datetime(2025, 3, 9, 22), datetime(2025, 3, 10, 6))])

    assert len(weeks) == 1
    assert weeks[0].week_start == date(2025, 3, 3)
    assert weeks[0].worked_minutes == 480


def test_requested_weeks_without_shifts_are_listed_as_zero():
    calc = WeeklyOvertimeCalculator()
    weeks = calc.weekly_hours([], weeks=[date(2025, 3, 3), date(2025, 3, 10)])

    assert [(w.week_start, w.worked_minutes) for w in weeks] == [(date(2025, 3, 3), 0), (date(2025, 3, 10), 0)]
