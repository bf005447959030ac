"""
Extraction of busy intervals from a roster, ordered for the slot finder.
"""

import logging
from datetime import date
from typing import Iterable, List

from .models import BusyInterval, as_date
from .roster import RosterEntity

logger = logging.getLogger(__name__)


def collect_intervals(roster: Iterable[RosterEntity], today: date) -> List[BusyInterval]:
    """
    Pull every busy interval out of ``roster`` that is not in the past.

    Today's intervals come first, sorted by start time, followed by the
    future intervals sorted by date and start time. Intervals before
    ``today`` are dropped.

    Args:
        roster: A ``Roster``, ``RosterView`` or any iterable of entities
        today: The caller's current date

    Returns:
        Ordered list of busy intervals
    """
    today = as_date(today)
    scheduled = [
        entity.busy_interval
        for entity in roster
        if entity.busy_interval is not None
    ]

    future = sorted(
        (interval for interval in scheduled if interval.date > today),
        key=lambda interval: (interval.date, interval.start)
    )
    todays = sorted(
        (interval for interval in scheduled if interval.date == today),
        key=lambda interval: interval.start
    )

    logger.debug(
        "Collected %d interval(s) for %s and %d later",
        len(todays), today, len(future)
    )
    return todays + future
