"""Domain models - booking fixture entities."""

from .test_data import AddOn, BookingTestData, CardDetails, GuestDetails, Room

__all__ = ["AddOn", "BookingTestData", "CardDetails", "GuestDetails", "Room"]
