"""
Roster loading from a YAML file.

Expected layout::

    students:
      - name: Alice Pauline
        phone: "94351253"
        email: alice@example.com
        tags: [math]
        lesson:
          date: 2026-10-20
          start: "10:00"
          end: "11:00"
"""

import datetime as dt
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..config import coerce_clock_value
from ..domain.exceptions import RosterFileError
from ..domain.models import BusyInterval, Student
from ..domain.roster import Roster

logger = logging.getLogger(__name__)


class LessonRecord(BaseModel):
    """A student's scheduled lesson as written in the file."""
    date: dt.date
    start: dt.time
    end: dt.time

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_clock_value(cls, value):
        return coerce_clock_value(value)

    def to_busy_interval(self) -> BusyInterval:
        return BusyInterval(date=self.date, start=self.start, end=self.end)


class StudentRecord(BaseModel):
    """One roster entry as written in the file."""
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    tags: List[str] = Field(default_factory=list)
    lesson: Optional[LessonRecord] = None

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, value):
        # Unquoted phone numbers arrive as ints
        if isinstance(value, int):
            return str(value)
        return value

    def to_student(self) -> Student:
        return Student(
            name=self.name,
            phone=self.phone,
            email=self.email,
            address=self.address,
            tags=frozenset(self.tags),
            lesson=self.lesson.to_busy_interval() if self.lesson else None,
        )


class RosterFile:
    """
    Reads a roster from a YAML file.

    Malformed files raise ``RosterFileError``; a file listing the same
    student twice raises ``DuplicateContentsError`` from the roster itself.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Roster:
        """
        Load the roster.

        Returns:
            Roster with the students in file order

        Raises:
            RosterFileError: If the file is missing or cannot be parsed
            DuplicateContentsError: If two entries share a name
        """
        if not self.path.exists():
            raise RosterFileError(f"Roster file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise RosterFileError(f"Invalid YAML in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise RosterFileError("Roster file must contain a mapping at the root level.")

        if "students" not in data:
            logger.warning("No 'students' key in %s, loading an empty roster", self.path)
        entries = data.get("students") or []
        if not isinstance(entries, list):
            raise RosterFileError("'students' must be a list.")

        students = [self._parse_entry(position, entry) for position, entry in enumerate(entries, 1)]
        logger.debug("Loaded %d student(s) from %s", len(students), self.path)

        return Roster(students)

    def _parse_entry(self, position: int, entry) -> Student:
        if not isinstance(entry, dict):
            raise RosterFileError(f"Entry {position} in {self.path} is not a mapping")

        try:
            return StudentRecord(**entry).to_student()
        except ValueError as exc:
            # pydantic ValidationError and InvalidIntervalError are both ValueErrors
            raise RosterFileError(f"Entry {position} in {self.path} is invalid: {exc}") from exc
