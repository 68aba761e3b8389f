"""
Schemas module initialization
"""
from smartconnect.schemas.auth import (
    LoginRequest,
    SignupRequest,
    Token,
    UserResponse,
)
from smartconnect.schemas.availability import (
    AvailabilityResponse,
    AvailabilitySettingsSchema,
    AvailabilitySlotIn,
    AvailabilitySlotOut,
    AvailabilityUpdate,
    DaySlots,
    OpenSlotsResponse,
    SaveAvailabilityResponse,
    SlotWindow,
)
from smartconnect.schemas.booking import (
    BookedWindow,
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingResult,
    BookingStatusUpdate,
)
from smartconnect.schemas.service import (
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceResult,
)

__all__ = [
    # Auth
    "LoginRequest",
    "SignupRequest",
    "Token",
    "UserResponse",
    # Availability
    "AvailabilityResponse",
    "AvailabilitySettingsSchema",
    "AvailabilitySlotIn",
    "AvailabilitySlotOut",
    "AvailabilityUpdate",
    "DaySlots",
    "OpenSlotsResponse",
    "SaveAvailabilityResponse",
    "SlotWindow",
    # Booking
    "BookedWindow",
    "BookingCreate",
    "BookingListResponse",
    "BookingResponse",
    "BookingResult",
    "BookingStatusUpdate",
    # Service
    "ServiceCreate",
    "ServiceListResponse",
    "ServiceResponse",
    "ServiceResult",
]
