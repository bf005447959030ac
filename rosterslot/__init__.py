"""
rosterslot - keep a roster of students and find the next free lesson slot.
"""

__version__ = "0.1.0"
