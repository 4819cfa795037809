from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .strategies.base import ArrivalStrategy, StatusDecision
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class ArrivalStrategyFactory:
    """Factory Pattern: choose the arrival strategy for a scan time."""

    grace_minutes: int = 0

    def for_arrival(self, *, arrival: time, school_start: time) -> ArrivalStrategy:
        day = date.min
        cutoff = datetime.combine(day, school_start) + timedelta(minutes=max(0, int(self.grace_minutes)))
        if datetime.combine(day, arrival) <= cutoff:
            return OnTimeStrategy()
        return LateStrategy()


def classify(arrival: time, school_start: time, grace_minutes: int = 0) -> StatusDecision:
    """Classify an arrival as present or late.

    `arrival <= school_start + grace` is present with 0 minutes late;
    anything after is late by the whole minutes elapsed since school start.
    """
    factory = ArrivalStrategyFactory(grace_minutes=grace_minutes)
    strategy = factory.for_arrival(arrival=arrival, school_start=school_start)
    return strategy.decide(arrival=arrival, school_start=school_start)
