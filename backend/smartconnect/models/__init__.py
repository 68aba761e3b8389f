"""
Models module initialization
"""
from smartconnect.models.user import User
from smartconnect.models.service import Service
from smartconnect.models.availability import AvailabilityRule, AvailabilitySettings
from smartconnect.models.booking import Booking, BookingStatus

__all__ = [
    "User",
    "Service",
    "AvailabilityRule",
    "AvailabilitySettings",
    "Booking",
    "BookingStatus",
]
