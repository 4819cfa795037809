from datetime import time

from school_attendance.attendance.factory import ArrivalStrategyFactory, classify
from school_attendance.attendance.strategies.late_strategy import LateStrategy
from school_attendance.attendance.strategies.on_time_strategy import OnTimeStrategy
from school_attendance.core.enums import AttendanceStatus


def test_arrival_exactly_at_start_is_present():
    decision = classify(time(8, 0), time(8, 0))

    assert decision.status == AttendanceStatus.PRESENT
    assert decision.minutes_late == 0


def test_arrival_before_start_is_present():
    assert classify(time(7, 55), time(8, 0)).status == AttendanceStatus.PRESENT


def test_late_minutes_are_floored():
    assert classify(time(8, 17), time(8, 0)).minutes_late == 17
    assert classify(time(8, 17, 59), time(8, 0)).minutes_late == 17
    assert classify(time(8, 0, 30), time(8, 0)).status == AttendanceStatus.LATE
    assert classify(time(8, 0, 30), time(8, 0)).minutes_late == 0


def test_grace_minutes_extend_the_present_window():
    assert classify(time(8, 5), time(8, 0), grace_minutes=5).status == AttendanceStatus.PRESENT

    decision = classify(time(8, 5, 1), time(8, 0), grace_minutes=5)
    assert decision.status == AttendanceStatus.LATE
    assert decision.minutes_late == 5


def test_classification_is_monotonic_over_the_day():
    start = time(8, 0)
    seen_late = False
    previous_minutes = 0
    for minute_of_day in range(6 * 60, 12 * 60):
        arrival = time(minute_of_day // 60, minute_of_day % 60)
        decision = classify(arrival, start)
        if seen_late:
            assert decision.status == AttendanceStatus.LATE
        if decision.status == AttendanceStatus.LATE:
            seen_late = True
            assert decision.minutes_late >= previous_minutes
            previous_minutes = decision.minutes_late


def test_factory_picks_strategy_by_cutoff():
    factory = ArrivalStrategyFactory(grace_minutes=5)

    assert isinstance(factory.for_arrival(arrival=time(8, 4, 59), school_start=time(8, 0)), OnTimeStrategy)
    assert isinstance(factory.for_arrival(arrival=time(8, 6), school_start=time(8, 0)), LateStrategy)
