"""
Pydantic Schemas for Availability
"""
import datetime as dt
from datetime import date, time
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from smartconnect.scheduling.rules import Weekday
from smartconnect.scheduling.windows import format_hhmm, parse_hhmm
from smartconnect.schemas.base import CamelModel


def _hhmm(value):
    if isinstance(value, time):
        return format_hhmm(parse_hhmm(value))
    return value


# ============== Request Schemas ==============

class AvailabilitySlotIn(CamelModel):
    """
    One rule as submitted by the manage-availability form.

    Times are validated when the rule is built, so malformed values are
    reported as a 400 with a readable message.
    """
    day_of_week: Optional[str] = None
    start_time: str
    end_time: str
    is_available: bool = True
    recurring_weekly: bool = True
    specific_date: Optional[date] = None


class AvailabilitySettingsSchema(CamelModel):
    """Provider booking settings"""
    booking_notice: int = Field(24, ge=0, description="Minimum lead time in hours")
    appointment_duration: int = Field(60, gt=0, le=1440, description="Minutes per appointment")
    break_between_appointments: int = Field(15, ge=0, le=1440, description="Minutes between appointments")


class AvailabilityUpdate(CamelModel):
    """Full replacement of a provider's availability"""
    slots: List[AvailabilitySlotIn] = Field(default_factory=list)
    settings: AvailabilitySettingsSchema


# ============== Response Schemas ==============

class AvailabilitySlotOut(CamelModel):
    """Stored availability rule"""
    id: UUID
    day_of_week: Weekday
    start_time: str
    end_time: str
    is_available: bool
    recurring_weekly: bool
    specific_date: Optional[date] = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def format_times(cls, value):
        return _hhmm(value)


class AvailabilityResponse(CamelModel):
    """Rules plus effective settings"""
    slots: List[AvailabilitySlotOut]
    settings: AvailabilitySettingsSchema


class SaveAvailabilityResponse(CamelModel):
    success: bool = True


class SlotWindow(CamelModel):
    """Bookable window"""
    start_time: str
    end_time: str


class DaySlots(CamelModel):
    date: dt.date
    slots: List[SlotWindow]


class OpenSlotsResponse(CamelModel):
    """Open windows per date for one provider"""
    provider_id: UUID
    timezone: str
    days: List[DaySlots]

