"""
Search predicates for ``Roster.filtered``.
"""

from dataclasses import dataclass
from typing import Tuple

from .models import Student


@dataclass(frozen=True)
class TagsContainKeywords:
    """
    Matches a student whose tags contain every keyword.

    Each keyword must match a whole word of a tag name, ignoring case. Partial
    words do not match ("mat" does not match the tag "math"). With no
    keywords every student matches.
    """
    keywords: Tuple[str, ...]

    def __post_init__(self):
        cleaned = tuple(keyword.strip() for keyword in self.keywords)
        for keyword in cleaned:
            if not keyword:
                raise ValueError("Tag keyword must not be empty")
            if len(keyword.split()) > 1:
                raise ValueError(f"Tag keyword '{keyword}' must be a single word")
        object.__setattr__(self, "keywords", cleaned)

    def __call__(self, student: Student) -> bool:
        words = {word.casefold() for tag in student.tags for word in tag.split()}
        return all(keyword.casefold() in words for keyword in self.keywords)
