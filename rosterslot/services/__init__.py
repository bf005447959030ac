"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .slot_booking import SlotBookingService

__all__ = ["SlotBookingService"]
