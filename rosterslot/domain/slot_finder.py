"""
Core business logic for finding the next free slot.

Pure domain logic: the caller supplies the current date and time, nothing
here reads the clock or touches the roster.
"""

import logging
from datetime import date, time
from typing import Dict, Iterable, List, NamedTuple, Optional

from pendulum import Date

from .models import BusyInterval, Slot, TimeWindow, as_date, minutes_of_day, time_from_minutes

logger = logging.getLogger(__name__)


class _Block(NamedTuple):
    """Merged busy range on one day, in minutes after midnight."""
    start: int
    end: int


class SlotFinder:
    """
    Finds the earliest slot of the window's duration that is free.

    Algorithm:
    1. Group busy intervals by date and merge every pair whose gap is too
       small to hold a slot
    2. Starting today, walk each day's merged blocks with a cursor that
       begins at the window start (or at ``now`` on today)
    3. Return the first gap long enough, otherwise try the next day
    """

    def __init__(self, window: TimeWindow):
        self.window = window

    def find_slot(
        self,
        intervals: Iterable[BusyInterval],
        *,
        now: time,
        today: date
    ) -> Slot:
        """
        Find the next available slot.

        Args:
            intervals: Busy intervals, typically from ``collect_intervals``
            now: Current time of day; seconds round up to the next minute
            today: Current date

        Returns:
            The earliest feasible Slot

        Raises:
            InvalidWindowError: If the window cannot hold any slot
        """
        self.window.validate()

        today = as_date(today)
        now_minutes = minutes_of_day(now, round_up=True)
        blocks_by_day = self._merge_by_day(intervals)

        day = today
        while True:
            lower_bound = self._lower_bound(day, today, now_minutes)

            if lower_bound is not None:
                start = self._first_fit(lower_bound, blocks_by_day.get(day, []))
                if start is not None:
                    slot = Slot(
                        date=day,
                        start=time_from_minutes(start),
                        end=time_from_minutes(start + self.window.duration_minutes)
                    )
                    logger.debug("Next free slot: %s", slot.format_display())
                    return slot

            logger.debug("No room on %s, moving to the next day", day)
            day = day.add(days=1)

    def _merge_by_day(self, intervals: Iterable[BusyInterval]) -> Dict[Date, List[_Block]]:
        """
        Coalesce each day's intervals into blocks separated by gaps of at
        least the requested duration.

        Example (duration 60):
        Busy: [10:00-11:00, 11:30-12:00, 14:00-15:00]
        Result: [10:00-12:00, 14:00-15:00]
        """
        by_day: Dict[Date, List[BusyInterval]] = {}
        for interval in intervals:
            by_day.setdefault(interval.date, []).append(interval)

        duration = self.window.duration_minutes
        merged: Dict[Date, List[_Block]] = {}

        for day, day_intervals in by_day.items():
            blocks: List[_Block] = []

            for interval in sorted(day_intervals, key=lambda i: i.start_minutes()):
                start, end = interval.start_minutes(), interval.end_minutes()

                if blocks and start - blocks[-1].end < duration:
                    # Gap cannot hold a slot, swallow it
                    blocks[-1] = _Block(blocks[-1].start, max(blocks[-1].end, end))
                else:
                    blocks.append(_Block(start, end))

            merged[day] = blocks

        return merged

    def _lower_bound(self, day: Date, today: Date, now_minutes: int) -> Optional[int]:
        """
        Earliest minute a slot may start on ``day``, or None when the day
        has no room left in the window.
        """
        window_start = self.window.start_minutes()
        window_end = self.window.end_minutes()

        if day == today:
            if now_minutes >= window_end:
                return None
            lower_bound = max(window_start, now_minutes)
        else:
            lower_bound = window_start

        if lower_bound + self.window.duration_minutes > window_end:
            return None

        return lower_bound

    def _first_fit(self, cursor: int, blocks: List[_Block]) -> Optional[int]:
        """Walk the day's blocks and return the first start that fits."""
        duration = self.window.duration_minutes
        window_end = self.window.end_minutes()

        for block in blocks:
            if cursor + duration <= min(block.start, window_end):
                return cursor

            cursor = max(cursor, block.end)
            if cursor + duration > window_end:
                return None

        if cursor + duration <= window_end:
            return cursor

        return None


def find_slot(
    intervals: Iterable[BusyInterval],
    window: TimeWindow,
    now: time,
    today: date
) -> Slot:
    """Find the earliest free slot for ``window``; see ``SlotFinder``."""
    return SlotFinder(window).find_slot(intervals, now=now, today=today)
