"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    DuplicateContentsError,
    DuplicateIdentityError,
    EntityNotFoundError,
    InvalidIntervalError,
    InvalidWindowError,
    NullArgumentError,
    RosterFileError,
    RosterSlotError,
    UnsupportedMutationError,
)
from .interval_collector import collect_intervals
from .models import BusyInterval, Slot, Student, TimeWindow
from .predicates import TagsContainKeywords
from .roster import Roster, RosterEntity, RosterView
from .slot_finder import SlotFinder, find_slot

__all__ = [
    "BusyInterval",
    "Slot",
    "Student",
    "TimeWindow",
    "Roster",
    "RosterEntity",
    "RosterView",
    "TagsContainKeywords",
    "SlotFinder",
    "collect_intervals",
    "find_slot",
    "RosterSlotError",
    "NullArgumentError",
    "DuplicateIdentityError",
    "DuplicateContentsError",
    "EntityNotFoundError",
    "UnsupportedMutationError",
    "InvalidWindowError",
    "InvalidIntervalError",
    "RosterFileError",
]
