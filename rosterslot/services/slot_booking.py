"""
Application services for booking the next free lesson.

The service ties the roster to the domain-level ``SlotFinder``: it collects
busy intervals, asks for the next slot and, when booking, writes the slot
back onto a student through the roster. The clock stays with the caller so
everything here is deterministic under test.
"""

from __future__ import annotations

import logging
from datetime import date, time

from ..domain.interval_collector import collect_intervals
from ..domain.models import Slot, Student, TimeWindow
from ..domain.roster import Roster
from ..domain.slot_finder import SlotFinder

logger = logging.getLogger(__name__)


class SlotBookingService:
    """
    Orchestrates interval collection, slot search and lesson assignment.
    """

    def __init__(self, roster: Roster, window: TimeWindow) -> None:
        self._roster = roster
        self._slot_finder = SlotFinder(window)

    @property
    def window(self) -> TimeWindow:
        return self._slot_finder.window

    def find_next_slot(self, *, today: date, now: time) -> Slot:
        """Find the earliest slot that clashes with no lesson in the roster."""
        intervals = collect_intervals(self._roster, today)
        return self._slot_finder.find_slot(intervals, now=now, today=today)

    def book_next_slot(self, student: Student, *, today: date, now: time) -> Student:
        """
        Assign the next free slot to ``student`` as their lesson.

        The student's current lesson is ignored during the search since it
        is about to be replaced.

        Returns:
            The updated student, as now stored in the roster

        Raises:
            EntityNotFoundError: If the student is not in the roster
        """
        current = self._roster.find(student)
        others = self._roster.filtered(lambda entry: not entry.is_same_entity(current))

        intervals = collect_intervals(others, today)
        slot = self._slot_finder.find_slot(intervals, now=now, today=today)

        updated = current.with_lesson(slot.to_busy_interval())
        self._roster.replace(current, updated)

        logger.info("Booked %s for %s", slot.format_display(), updated.name)
        return updated
