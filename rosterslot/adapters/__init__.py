"""
Adapters layer - Roster files on disk.
"""

from .roster_file import RosterFile

__all__ = ["RosterFile"]
