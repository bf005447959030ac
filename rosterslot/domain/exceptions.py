"""
Domain-specific exception hierarchy for the roster slot finder.
"""


class RosterSlotError(Exception):
    """Base class for all application-level errors."""


class NullArgumentError(RosterSlotError, ValueError):
    """Raised when a required value is missing (``None``)."""


class DuplicateIdentityError(RosterSlotError):
    """Raised when an operation would put two same-identity entities in a roster."""


class DuplicateContentsError(DuplicateIdentityError):
    """Raised when a replacement sequence already contains same-identity entities."""


class EntityNotFoundError(RosterSlotError):
    """Raised when the target of a replace or remove is not in the roster."""


class UnsupportedMutationError(RosterSlotError, TypeError):
    """Raised when something tries to write through a read-only roster view."""


class InvalidWindowError(RosterSlotError, ValueError):
    """Raised when a booking window cannot host any slot."""


class InvalidIntervalError(RosterSlotError, ValueError):
    """Raised when a busy interval ends before it starts."""


class RosterFileError(RosterSlotError):
    """Raised when roster data cannot be read or parsed."""
