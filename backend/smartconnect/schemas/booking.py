"""
Pydantic Schemas for Bookings
"""
from datetime import date, datetime, time
from typing import ClassVar, List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from smartconnect.scheduling.status import BookingStatus
from smartconnect.scheduling.windows import format_hhmm, parse_hhmm
from smartconnect.schemas.base import CamelModel


# ============== Request Schemas ==============

class BookingCreate(CamelModel):
    """
    Schema for creating a booking.

    Required fields are optional here so that missing ones are reported
    together with a 400 rather than a per-field 422.
    """
    provider_id: Optional[UUID] = None
    service_id: Optional[UUID] = None
    booking_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=2000)

    REQUIRED: ClassVar[tuple] = ("provider_id", "service_id", "booking_date", "start_time", "end_time")

    def missing_fields(self) -> List[str]:
        missing = []
        for name in self.REQUIRED:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(type(self).model_fields[name].alias or name)
        return missing


class BookingStatusUpdate(CamelModel):
    """Schema for a status transition"""
    status: BookingStatus


# ============== Response Schemas ==============

class BookingResponse(CamelModel):
    """Full booking response"""
    id: UUID
    seeker_id: UUID
    provider_id: UUID
    service_id: UUID
    booking_date: date
    start_time: str
    end_time: str
    status: BookingStatus
    notes: str = ""
    created_at: datetime

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def format_times(cls, value):
        if isinstance(value, time):
            return format_hhmm(parse_hhmm(value))
        return value


class BookingResult(CamelModel):
    """Result of a create or status update"""
    success: bool = True
    booking: BookingResponse


class BookingListResponse(CamelModel):
    bookings: List[BookingResponse]


class BookedWindow(CamelModel):
    """Time range held by an active booking"""
    start_time: str
    end_time: str
