"""
Tests for the Roster container.
"""

from datetime import date, time

import pytest

from rosterslot.domain.exceptions import (
    DuplicateContentsError,
    DuplicateIdentityError,
    EntityNotFoundError,
    NullArgumentError,
    UnsupportedMutationError,
)
from rosterslot.domain.models import BusyInterval, Student
from rosterslot.domain.roster import Roster, RosterView

ALICE = Student(
    name="Alice Pauline",
    phone="94351253",
    email="alice@example.com",
    tags={"math"},
    lesson=BusyInterval(date=date(2024, 11, 25), start=time(10, 0), end=time(11, 0)),
)
ALICE_EDITED = Student(name="Alice Pauline", phone="99999999", tags={"physics"})
BOB = Student(name="Bob Choo", phone="22222222", email="bob@example.com")
CARL = Student(name="Carl Kurz", phone="95352563")


@pytest.fixture
def roster():
    return Roster()


class TestContains:
    """Tests for Roster.contains."""

    def test_none_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.contains(None)

    def test_student_not_in_roster(self, roster):
        assert not roster.contains(ALICE)

    def test_student_in_roster(self, roster):
        roster.add(ALICE)

        assert roster.contains(ALICE)

    def test_student_with_same_identity_in_roster(self, roster):
        """A different student record with the same name counts as present."""
        roster.add(ALICE)

        assert roster.contains(ALICE_EDITED)


class TestAdd:
    """Tests for Roster.add."""

    def test_none_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.add(None)

    def test_add_preserves_insertion_order(self, roster):
        roster.add(BOB)
        roster.add(ALICE)
        roster.add(CARL)

        assert list(roster) == [BOB, ALICE, CARL]
        assert len(roster) == 3

    def test_duplicate_raises_error(self, roster):
        roster.add(ALICE)

        with pytest.raises(DuplicateIdentityError):
            roster.add(ALICE)

    def test_same_identity_raises_error(self, roster):
        roster.add(ALICE)

        with pytest.raises(DuplicateIdentityError):
            roster.add(Student(name="ALICE PAULINE"))

        assert list(roster) == [ALICE]


class TestReplace:
    """Tests for Roster.replace."""

    def test_none_target_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.replace(None, ALICE)

    def test_none_replacement_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.replace(ALICE, None)

    def test_target_not_in_roster_raises_error(self, roster):
        with pytest.raises(EntityNotFoundError):
            roster.replace(ALICE, ALICE)

    def test_replace_with_itself(self, roster):
        roster.add(ALICE)

        roster.replace(ALICE, ALICE)

        assert roster == Roster([ALICE])

    def test_replace_with_same_identity(self, roster):
        roster.add(ALICE)

        roster.replace(ALICE, ALICE_EDITED)

        assert roster == Roster([ALICE_EDITED])

    def test_replace_with_different_identity(self, roster):
        roster.add(ALICE)

        roster.replace(ALICE, BOB)

        assert roster == Roster([BOB])

    def test_replace_keeps_position(self, roster):
        roster.replace_all([BOB, ALICE, CARL])

        roster.replace(ALICE, ALICE_EDITED)

        assert list(roster) == [BOB, ALICE_EDITED, CARL]

    def test_replace_located_by_identity(self, roster):
        """A stale copy of the target still finds the stored entry."""
        roster.add(ALICE)

        roster.replace(ALICE_EDITED, BOB)

        assert list(roster) == [BOB]

    def test_replacement_clashing_with_other_entry_raises_error(self, roster):
        roster.add(ALICE)
        roster.add(BOB)

        with pytest.raises(DuplicateIdentityError):
            roster.replace(ALICE, BOB)

        assert list(roster) == [ALICE, BOB]


class TestRemove:
    """Tests for Roster.remove."""

    def test_none_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.remove(None)

    def test_missing_student_raises_error(self, roster):
        with pytest.raises(EntityNotFoundError):
            roster.remove(ALICE)

    def test_same_identity_but_different_fields_is_not_removed(self, roster):
        """Removal needs an exact match, not just the same identity."""
        roster.add(ALICE)

        with pytest.raises(EntityNotFoundError):
            roster.remove(ALICE_EDITED)

        assert list(roster) == [ALICE]

    def test_remove_existing_student(self, roster):
        roster.replace_all([ALICE, BOB])

        roster.remove(ALICE)

        assert roster == Roster([BOB])
        assert not roster.contains(ALICE)


class TestReplaceAll:
    """Tests for Roster.replace_all."""

    def test_none_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.replace_all(None)

    def test_none_entry_raises_error(self, roster):
        with pytest.raises(NullArgumentError):
            roster.replace_all([ALICE, None])

    def test_replace_with_other_roster(self, roster):
        roster.add(ALICE)
        other = Roster([BOB, CARL])

        roster.replace_all(other)

        assert roster == other

    def test_replace_with_list(self, roster):
        roster.add(ALICE)

        roster.replace_all([CARL, BOB])

        assert list(roster) == [CARL, BOB]

    def test_list_with_duplicates_raises_error(self, roster):
        roster.add(CARL)

        with pytest.raises(DuplicateContentsError):
            roster.replace_all([ALICE, BOB, ALICE_EDITED])

        assert list(roster) == [CARL]

    def test_duplicate_contents_is_an_identity_error(self, roster):
        with pytest.raises(DuplicateIdentityError):
            roster.replace_all([ALICE, ALICE])

    def test_constructor_rejects_duplicates(self):
        with pytest.raises(DuplicateContentsError):
            Roster([ALICE, ALICE_EDITED])


class TestSnapshot:
    """Tests for the read-only roster view."""

    def test_snapshot_contents(self, roster):
        roster.replace_all([ALICE, BOB])

        view = roster.snapshot()

        assert isinstance(view, RosterView)
        assert view == [ALICE, BOB]
        assert view[1] == BOB
        assert list(view[:1]) == [ALICE]
        assert len(view) == 2
        assert BOB in view

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda view: view.append(CARL),
            lambda view: view.extend([CARL]),
            lambda view: view.insert(0, CARL),
            lambda view: view.remove(ALICE),
            lambda view: view.pop(),
            lambda view: view.clear(),
            lambda view: view.sort(),
            lambda view: view.reverse(),
            lambda view: view.__setitem__(0, CARL),
            lambda view: view.__delitem__(0),
        ],
    )
    def test_mutation_raises_error(self, roster, mutate):
        roster.replace_all([ALICE, BOB])
        view = roster.snapshot()

        with pytest.raises(UnsupportedMutationError):
            mutate(view)

        assert view == [ALICE, BOB]
        assert list(roster) == [ALICE, BOB]

    def test_unsupported_mutation_is_a_type_error(self, roster):
        roster.add(ALICE)

        with pytest.raises(TypeError):
            roster.snapshot()[0] = BOB

    def test_snapshot_is_not_affected_by_later_changes(self, roster):
        roster.add(ALICE)
        view = roster.snapshot()

        roster.add(BOB)

        assert view == [ALICE]


class TestSortFindFilter:
    """Tests for the supplementary roster operations."""

    def test_sort_by_name(self, roster):
        roster.replace_all([CARL, ALICE, BOB])

        roster.sort(key=lambda student: student.name)
        assert list(roster) == [ALICE, BOB, CARL]

        roster.sort(key=lambda student: student.name, reverse=True)
        assert list(roster) == [CARL, BOB, ALICE]

    def test_find_returns_stored_entry(self, roster):
        roster.replace_all([ALICE, BOB])

        assert roster.find(ALICE_EDITED) is ALICE

    def test_find_missing_raises_error(self, roster):
        with pytest.raises(EntityNotFoundError):
            roster.find(ALICE)

    def test_filtered(self, roster):
        roster.replace_all([ALICE, BOB, CARL])

        view = roster.filtered(lambda student: student.phone.startswith("9"))

        assert view == [ALICE, CARL]

    def test_equality(self):
        assert Roster([ALICE, BOB]) == Roster([ALICE, BOB])
        assert Roster([ALICE, BOB]) != Roster([BOB, ALICE])
        assert Roster() != [ALICE]
