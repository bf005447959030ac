"""
Tests for the SlotBookingService orchestration layer.
"""

from datetime import date, time

import pytest

from rosterslot.domain.exceptions import EntityNotFoundError
from rosterslot.domain.interval_collector import collect_intervals
from rosterslot.domain.models import BusyInterval, Slot, Student, TimeWindow
from rosterslot.domain.roster import Roster
from rosterslot.domain.slot_finder import find_slot
from rosterslot.services.slot_booking import SlotBookingService

TODAY = date(2024, 11, 25)
TOMORROW = date(2024, 11, 26)


def _build_service(roster: Roster, start=time(10, 0), end=time(14, 0), duration=60) -> SlotBookingService:
    window = TimeWindow(start_time=start, end_time=end, duration_minutes=duration)
    return SlotBookingService(roster=roster, window=window)


def _lesson(day, start, end):
    return BusyInterval(date=day, start=start, end=end)


def test_find_next_slot_uses_roster_lessons():
    """End-to-end call should skip over booked lessons."""
    roster = Roster([
        Student(name="Alice", lesson=_lesson(TODAY, time(10, 0), time(11, 30))),
        Student(name="Bob", lesson=_lesson(TODAY, time(11, 45), time(12, 0))),
        Student(name="Carl"),
    ])
    service = _build_service(roster)

    slot = service.find_next_slot(today=TODAY, now=time(8, 0))

    assert slot == Slot(date=TODAY, start=time(12, 0), end=time(13, 0))


def test_find_next_slot_matches_core_functions():
    roster = Roster([
        Student(name="Alice", lesson=_lesson(TODAY, time(10, 0), time(13, 1))),
        Student(name="Bob", lesson=_lesson(TOMORROW, time(10, 0), time(10, 30))),
    ])
    service = _build_service(roster)

    expected = find_slot(
        collect_intervals(roster, TODAY),
        service.window,
        now=time(8, 0),
        today=TODAY,
    )

    assert service.find_next_slot(today=TODAY, now=time(8, 0)) == expected
    assert expected == Slot(date=TOMORROW, start=time(10, 30), end=time(11, 30))


def test_book_next_slot_assigns_lesson():
    alice = Student(name="Alice", lesson=_lesson(TODAY, time(10, 0), time(11, 0)))
    bob = Student(name="Bob", phone="22222222")
    roster = Roster([alice, bob])
    service = _build_service(roster)

    updated = service.book_next_slot(bob, today=TODAY, now=time(8, 0))

    assert updated.lesson == _lesson(TODAY, time(11, 0), time(12, 0))
    assert updated.phone == "22222222"
    assert list(roster) == [alice, updated]


def test_booking_ignores_the_students_own_lesson():
    """A student's lesson is about to be replaced, so it does not block the search."""
    alice = Student(name="Alice", lesson=_lesson(TODAY, time(10, 0), time(11, 0)))
    roster = Roster([alice])
    service = _build_service(roster, start=time(10, 0), end=time(11, 0))

    updated = service.book_next_slot(alice, today=TODAY, now=time(8, 0))

    assert updated.lesson == _lesson(TODAY, time(10, 0), time(11, 0))
    assert service.find_next_slot(today=TODAY, now=time(8, 0)).date == TOMORROW


def test_booking_with_stale_copy_updates_stored_student():
    stored = Student(name="Alice", phone="94351253")
    roster = Roster([stored])
    service = _build_service(roster)

    updated = service.book_next_slot(Student(name="alice"), today=TODAY, now=time(8, 0))

    assert updated.phone == "94351253"
    assert list(roster) == [updated]


def test_booking_unknown_student_raises_error():
    roster = Roster([Student(name="Alice")])
    service = _build_service(roster)

    with pytest.raises(EntityNotFoundError):
        service.book_next_slot(Student(name="Bob"), today=TODAY, now=time(8, 0))

    assert list(roster) == [Student(name="Alice")]
