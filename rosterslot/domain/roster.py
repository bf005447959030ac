"""
The roster: an ordered list of entities that never holds two entries with
the same identity.

Adding and replacing check identity (``is_same_entity``); removing and bulk
replacement of an exact entry use full equality (``==``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Callable, Iterable, Iterator, List, Optional, Protocol

from .exceptions import (
    DuplicateContentsError,
    DuplicateIdentityError,
    EntityNotFoundError,
    NullArgumentError,
    UnsupportedMutationError,
)
from .models import BusyInterval

logger = logging.getLogger(__name__)


class RosterEntity(Protocol):
    """Protocol describing what the roster needs from its entries."""

    @property
    def busy_interval(self) -> Optional[BusyInterval]:
        """The entity's scheduled block, if any."""

    def is_same_entity(self, other: Any) -> bool:
        """Return True if ``other`` is the same real-world entity."""


def _require(value: Any, name: str) -> None:
    if value is None:
        raise NullArgumentError(f"{name} must not be None")


class RosterView(Sequence):
    """
    Read-only ordered view over roster entries.

    Supports indexing, slicing, iteration and ``len``. Any list-style write
    raises ``UnsupportedMutationError``.
    """

    def __init__(self, entries: Iterable[RosterEntity]):
        self._entries = tuple(entries)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RosterView(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RosterView):
            return self._entries == other._entries
        if isinstance(other, (list, tuple)):
            return list(self._entries) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RosterView({list(self._entries)!r})"

    def _reject(self, *args, **kwargs):
        raise UnsupportedMutationError("Roster views are read-only")

    __setitem__ = _reject
    __delitem__ = _reject
    __iadd__ = _reject
    __imul__ = _reject
    append = _reject
    extend = _reject
    insert = _reject
    remove = _reject
    pop = _reject
    clear = _reject
    sort = _reject
    reverse = _reject


class Roster:
    """
    Ordered container of entities with unique identities.

    Every mutation validates its arguments before changing any state, so a
    failed call leaves the roster untouched.
    """

    def __init__(self, entities: Optional[Iterable[RosterEntity]] = None):
        self._entries: List[RosterEntity] = []
        if entities is not None:
            self.replace_all(entities)

    def contains(self, entity: RosterEntity) -> bool:
        """Return True if an entry has the same identity as ``entity``."""
        _require(entity, "entity")
        return any(entity.is_same_entity(existing) for existing in self._entries)

    def find(self, entity: RosterEntity) -> RosterEntity:
        """
        Return the entry sharing ``entity``'s identity.

        Raises:
            EntityNotFoundError: If no such entry exists
        """
        _require(entity, "entity")
        index = self._index_of_identity(entity)
        if index is None:
            raise EntityNotFoundError(f"{entity!r} is not in the roster")
        return self._entries[index]

    def add(self, entity: RosterEntity) -> None:
        """
        Append an entity.

        Raises:
            DuplicateIdentityError: If an entry with the same identity exists
        """
        _require(entity, "entity")
        if self.contains(entity):
            raise DuplicateIdentityError(f"{entity!r} is already in the roster")
        self._entries.append(entity)
        logger.debug("Added %r (roster size %d)", entity, len(self._entries))

    def replace(self, target: RosterEntity, replacement: RosterEntity) -> None:
        """
        Replace ``target`` with ``replacement`` at the same position.

        Raises:
            EntityNotFoundError: If no entry shares ``target``'s identity
            DuplicateIdentityError: If ``replacement`` would clash with a
                different entry
        """
        _require(target, "target")
        _require(replacement, "replacement")

        index = self._index_of_identity(target)
        if index is None:
            raise EntityNotFoundError(f"{target!r} is not in the roster")

        if not target.is_same_entity(replacement) and self.contains(replacement):
            raise DuplicateIdentityError(f"{replacement!r} is already in the roster")

        self._entries[index] = replacement
        logger.debug("Replaced entry %d with %r", index, replacement)

    def remove(self, entity: RosterEntity) -> None:
        """
        Remove the first entry equal to ``entity``.

        Raises:
            EntityNotFoundError: If no entry is equal to ``entity``
        """
        _require(entity, "entity")
        try:
            self._entries.remove(entity)
        except ValueError:
            raise EntityNotFoundError(f"{entity!r} is not in the roster") from None
        logger.debug("Removed %r", entity)

    def replace_all(self, entities: Iterable[RosterEntity]) -> None:
        """
        Discard the current contents and adopt ``entities`` in order.

        ``entities`` may be another ``Roster`` or any iterable.

        Raises:
            DuplicateContentsError: If ``entities`` has two same-identity entries
        """
        _require(entities, "entities")
        candidates = list(entities)
        for entity in candidates:
            _require(entity, "entity")

        if not isinstance(entities, Roster) and not self._are_unique(candidates):
            raise DuplicateContentsError("Entities must not contain duplicate identities")

        self._entries = candidates
        logger.debug("Roster replaced with %d entries", len(candidates))

    def sort(self, key: Callable[[Any], Any], reverse: bool = False) -> None:
        """Reorder entries in place (stable)."""
        _require(key, "key")
        self._entries = sorted(self._entries, key=key, reverse=reverse)

    def snapshot(self) -> RosterView:
        """Return a read-only view of the current entries."""
        return RosterView(self._entries)

    def filtered(self, predicate: Callable[[Any], bool]) -> RosterView:
        """Return a read-only view of the entries matching ``predicate``."""
        _require(predicate, "predicate")
        return RosterView(entity for entity in self._entries if predicate(entity))

    def __iter__(self) -> Iterator[RosterEntity]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Roster):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Roster({self._entries!r})"

    def _index_of_identity(self, entity: RosterEntity) -> Optional[int]:
        for index, existing in enumerate(self._entries):
            if entity.is_same_entity(existing):
                return index
        return None

    @staticmethod
    def _are_unique(entities: List[RosterEntity]) -> bool:
        for i, first in enumerate(entities):
            for second in entities[i + 1:]:
                if first.is_same_entity(second):
                    return False
        return True
