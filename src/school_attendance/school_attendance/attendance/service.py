from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Sequence

from ..common.datetime_utils import format_clock_time, now_local, parse_clock_time, parse_iso_date
from ..common.locks import KeyedLock
from ..core.constants import DEFAULT_MIN_DEPARTURE_GAP_MINUTES, MAX_EVENTS_PER_DAY
from ..core.enums import CheckInType, PersonType
from ..core.exceptions import DuplicateEventError, RejectedError, ValidationError
from ..people.model import Person
from ..people.resolver import IdentityResolver
from ..settings.service import SettingsService
from .factory import ArrivalStrategyFactory
from .model import AttendanceEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    person: Person
    event: AttendanceEvent
    today: Sequence[AttendanceEvent]

    @property
    def message(self) -> str:
        if self.event.is_arrival:
            return f"Arrival recorded for {self.person.name}"
        return f"Departure recorded for {self.person.name}"

    def to_dict(self) -> dict:
        e = self.event
        body = {
            "success": True,
            "message": self.message,
            "person_type": self.person.person_type.value,
            "name": self.person.name,
            "class": self.person.class_name,
            "check_in_type": e.check_in_type.value,
            "check_in_time": format_clock_time(e.check_in_time),
            "status": e.status.value if e.status else None,
            "minutes_late": e.minutes_late,
        }
        if self.person.person_type == PersonType.STUDENT:
            body["student_id"] = self.person.code
            body["attendance"] = [ev.to_dict() for ev in self.today]
        else:
            body["teacher_id"] = self.person.code
        return body


class AttendanceService:
    """Daily session tracker: arrival, then departure, then nothing.

    Every scan for the same (person, day) runs under one keyed lock; the
    store's unique key catches whatever slips past it across processes.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        resolver: IdentityResolver,
        settings: SettingsService,
        *,
        strategy_factory: ArrivalStrategyFactory | None = None,
        max_client_skew_minutes: Optional[int] = None,
        min_departure_gap_minutes: int = DEFAULT_MIN_DEPARTURE_GAP_MINUTES,
        locks: KeyedLock | None = None,
    ):
        self._attendance = attendance
        self._resolver = resolver
        self._settings = settings
        self._factory = strategy_factory or ArrivalStrategyFactory()
        self._max_skew = max_client_skew_minutes
        gap = timedelta(minutes=max(int(min_departure_gap_minutes), 0))
        # A zero gap still requires the departure to be strictly later.
        self._min_gap = max(gap, timedelta(seconds=1))
        self._locks = locks or KeyedLock()

    def _scan_moment(self, client_date: Any, client_time: Any, now: datetime) -> tuple[date, time]:
        if not client_date and not client_time:
            return now.date(), now.time().replace(microsecond=0)
        if not client_date or not client_time:
            raise ValidationError("client_date and client_time must be sent together")

        day = parse_iso_date(str(client_date).strip())
        clock = parse_clock_time(client_time, "client_time")

        if self._max_skew is not None:
            skew = abs((datetime.combine(day, clock) - now).total_seconds()) / 60
            if skew > self._max_skew:
                raise ValidationError("Device clock differs from server clock; check the scanner time")
        return day, clock

    def record_scan(
        self,
        code: Any,
        client_date: Any = None,
        client_time: Any = None,
        *,
        now: datetime | None = None,
    ) -> CheckInResult:
        now = now or now_local()
        person = self._resolver.resolve(code)
        day, clock = self._scan_moment(client_date, client_time, now)

        with self._locks.hold((person.person_type, person.person_id, day)):
            events = self._attendance.list_for_person_and_date(
                person_type=person.person_type, person_id=person.person_id, attendance_date=day
            )
            kinds = {e.check_in_type for e in events}

            if len(events) >= MAX_EVENTS_PER_DAY:
                self._reject(person, day, "Already scanned twice today")

            try:
                if CheckInType.ARRIVAL not in kinds:
                    event = self._record_arrival(person, day, clock, now)
                else:
                    arrival = next(e for e in events if e.is_arrival)
                    event = self._record_departure(person, day, clock, now, arrival)
            except DuplicateEventError:
                self._reject(person, day, "Scan already recorded, please wait")

            today = list(events) + [event]

        logger.info(
            "%s %s %s on %s at %s (%s)",
            person.person_type.value,
            person.code,
            event.check_in_type.value,
            day.isoformat(),
            format_clock_time(clock),
            event.status.value if event.status else "-",
        )
        return CheckInResult(person=person, event=event, today=today)

    def _record_arrival(self, person: Person, day: date, clock: time, now: datetime) -> AttendanceEvent:
        start = self._settings.get().school_start_time
        strategy = self._factory.for_arrival(arrival=clock, school_start=start)
        decision = strategy.decide(arrival=clock, school_start=start)
        return self._attendance.insert_arrival(
            person_type=person.person_type,
            person_id=person.person_id,
            attendance_date=day,
            check_in_time=clock,
            status=decision.status,
            minutes_late=decision.minutes_late,
            recorded_at=now,
        )

    def _record_departure(
        self, person: Person, day: date, clock: time, now: datetime, arrival: AttendanceEvent
    ) -> AttendanceEvent:
        if clock < arrival.check_in_time:
            self._reject(person, day, "Departure cannot be earlier than arrival")

        latest_arrival = datetime.combine(day, clock) - self._min_gap
        if latest_arrival.date() != day or latest_arrival.time() < arrival.check_in_time:
            self._reject(person, day, "Scan already recorded, please wait")

        event = self._attendance.insert_departure(
            person_type=person.person_type,
            person_id=person.person_id,
            attendance_date=day,
            check_in_time=clock,
            latest_arrival=latest_arrival.time(),
            recorded_at=now,
        )
        if event is None:
            # Arrival moved or vanished between our read and the insert.
            self._reject(person, day, "Scan already recorded, please wait")
        return event

    def _reject(self, person: Person, day: date, message: str) -> None:
        logger.info("Rejected scan of %s on %s: %s", person.code, day.isoformat(), message)
        raise RejectedError(message)

    def delete_all(self, *, academic_year_id: Optional[int] = None) -> int:
        deleted = self._attendance.delete_all(academic_year_id=academic_year_id)
        if academic_year_id is None:
            logger.info("Deleted all attendance events (%d)", deleted)
        else:
            logger.info("Deleted attendance events of academic year %s (%d)", academic_year_id, deleted)
        return deleted
