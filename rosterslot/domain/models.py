"""
Domain models for rosters, busy intervals and slot calculations.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import FrozenSet, Optional

import pendulum
from pendulum import Date, Time

from .exceptions import InvalidIntervalError, InvalidWindowError

MINUTES_PER_DAY = 24 * 60
MIDNIGHT = pendulum.time(0, 0)


def as_date(value: date) -> Date:
    """Normalise any ``date``/``datetime`` to a pendulum ``Date``."""
    if isinstance(value, datetime):
        value = value.date()
    return pendulum.date(value.year, value.month, value.day)


def as_time(value: time) -> Time:
    """Normalise any ``time`` to a pendulum ``Time``."""
    return pendulum.time(value.hour, value.minute, value.second, value.microsecond)


def minutes_of_day(value: time, round_up: bool = False) -> int:
    """
    Convert a time of day to whole minutes after midnight.

    Seconds are dropped unless ``round_up`` is set, in which case any
    sub-minute remainder moves the result to the next minute.
    """
    minutes = value.hour * 60 + value.minute
    if round_up and (value.second or value.microsecond):
        minutes += 1
    return minutes


def time_from_minutes(minutes: int) -> Time:
    """Inverse of ``minutes_of_day`` for values inside a single day."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return pendulum.time(minutes // 60, minutes % 60)


@dataclass(frozen=True)
class TimeWindow:
    """
    The daily booking window plus the duration of the slot being requested.

    Invariant: at least one slot of ``duration_minutes`` fits between
    ``start_time`` and ``end_time``.
    """
    start_time: Time
    end_time: Time
    duration_minutes: int

    def __post_init__(self):
        object.__setattr__(self, "start_time", as_time(self.start_time))
        object.__setattr__(self, "end_time", as_time(self.end_time))
        self.validate()

    def validate(self) -> None:
        """Raise ``InvalidWindowError`` if no slot can ever fit this window."""
        if self.duration_minutes <= 0:
            raise InvalidWindowError(
                f"Duration must be positive, got {self.duration_minutes} minutes"
            )
        if self.start_time >= self.end_time:
            raise InvalidWindowError(
                f"Window start {self.start_time} must be before window end {self.end_time}"
            )
        if self.start_minutes() + self.duration_minutes > self.end_minutes():
            raise InvalidWindowError(
                f"A {self.duration_minutes} minute slot does not fit between "
                f"{self.start_time} and {self.end_time}"
            )

    def start_minutes(self) -> int:
        return minutes_of_day(self.start_time, round_up=True)

    def end_minutes(self) -> int:
        return minutes_of_day(self.end_time)


@dataclass(frozen=True)
class BusyInterval:
    """
    One occupied block on a single date.

    An ``end`` of midnight is a sentinel meaning the block runs until the
    end of the day.
    """
    date: Date
    start: Time
    end: Time

    def __post_init__(self):
        object.__setattr__(self, "date", as_date(self.date))
        object.__setattr__(self, "start", as_time(self.start))
        object.__setattr__(self, "end", as_time(self.end))

        if not self.runs_to_end_of_day and self.start > self.end:
            raise InvalidIntervalError(
                f"Start time {self.start} must not be after end time {self.end}"
            )

    @property
    def runs_to_end_of_day(self) -> bool:
        return self.end == MIDNIGHT

    def start_minutes(self) -> int:
        return minutes_of_day(self.start)

    def end_minutes(self) -> int:
        """End of the block in minutes; the midnight sentinel maps to 24:00."""
        if self.runs_to_end_of_day:
            return MINUTES_PER_DAY
        return minutes_of_day(self.end, round_up=True)

    def __str__(self) -> str:
        return (
            f"{self.date.format('DD.MM.YYYY')} "
            f"{self.start.format('HH:mm')} - {self.end.format('HH:mm')}"
        )


@dataclass(frozen=True)
class Slot:
    """
    A free block found by the slot finder.

    Invariant: start must be before end.
    """
    date: Date
    start: Time
    end: Time

    def __post_init__(self):
        object.__setattr__(self, "date", as_date(self.date))
        object.__setattr__(self, "start", as_time(self.start))
        object.__setattr__(self, "end", as_time(self.end))

        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return minutes_of_day(self.end) - minutes_of_day(self.start)

    def overlaps(self, interval: BusyInterval) -> bool:
        """Check if this slot overlaps a busy interval."""
        if interval.date != self.date:
            return False
        return (
            minutes_of_day(self.start) < interval.end_minutes()
            and minutes_of_day(self.end) > interval.start_minutes()
        )

    def to_busy_interval(self) -> BusyInterval:
        """The busy interval an entity holds once this slot is assigned to it."""
        return BusyInterval(date=self.date, start=self.start, end=self.end)

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: Weekday, DD.MM.YYYY | HH:MM - HH:MM
        """
        date_str = self.date.format("dddd, DD.MM.YYYY")
        time_str = f"{self.start.format('HH:mm')} - {self.end.format('HH:mm')}"
        return f"{date_str} | {time_str} ({self.duration_minutes()} min)"


@dataclass(frozen=True)
class Student:
    """
    A roster entry.

    Identity (``is_same_entity``) is the case-insensitive name; ``==``
    compares every field.
    """
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)
    lesson: Optional[BusyInterval] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Student name must not be blank")
        object.__setattr__(self, "tags", frozenset(self.tags))

    @property
    def busy_interval(self) -> Optional[BusyInterval]:
        return self.lesson

    def is_same_entity(self, other: object) -> bool:
        """Check whether ``other`` is the same real-world student."""
        if other is self:
            return True
        if not isinstance(other, Student):
            return False
        return self.name.casefold() == other.name.casefold()

    def with_lesson(self, lesson: Optional[BusyInterval]) -> "Student":
        """Return a copy of this student holding ``lesson`` instead."""
        return replace(self, lesson=lesson)
