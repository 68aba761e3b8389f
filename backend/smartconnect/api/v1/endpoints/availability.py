"""
Availability Endpoints
"""
from datetime import date
from typing import Any, Optional
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.api import deps
from smartconnect.core.exceptions import AuthorizationError
from smartconnect.core.permissions import RequestContext
from smartconnect.db.database import get_db
from smartconnect.scheduling.rules import SlotSettings, make_rule
from smartconnect.schemas.availability import (
    AvailabilityResponse,
    AvailabilitySettingsSchema,
    AvailabilitySlotOut,
    AvailabilityUpdate,
    DaySlots,
    OpenSlotsResponse,
    SaveAvailabilityResponse,
    SlotWindow,
)
from smartconnect.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{provider_id}", response_model=AvailabilityResponse)
async def get_availability(
    provider_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get a provider's availability rules and booking settings.
    Settings fall back to the defaults until the provider saves their own.
    """
    rules = await AvailabilityService.list_rules(db, provider_id)
    slot_settings = await AvailabilityService.get_settings(db, provider_id)
    return AvailabilityResponse(
        slots=[AvailabilitySlotOut.model_validate(rule) for rule in rules],
        settings=AvailabilitySettingsSchema(
            booking_notice=slot_settings.booking_notice,
            appointment_duration=slot_settings.appointment_duration,
            break_between_appointments=slot_settings.break_between_appointments,
        ),
    )


@router.post("/{provider_id}", response_model=SaveAvailabilityResponse)
async def save_availability(
    provider_id: UUID,
    availability_in: AvailabilityUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """
    Replace a provider's availability.

    The submitted slots become the provider's complete rule set.
    Only the provider themselves may do this.
    """
    if not ctx.is_provider or ctx.actor_id != provider_id:
        raise AuthorizationError("Only the provider can manage this availability")

    rules = [
        make_rule(
            slot.start_time,
            slot.end_time,
            recurring_weekly=slot.recurring_weekly,
            day_of_week=slot.day_of_week,
            specific_date=slot.specific_date,
            is_available=slot.is_available,
        )
        for slot in availability_in.slots
    ]
    slot_settings = SlotSettings(
        booking_notice=availability_in.settings.booking_notice,
        appointment_duration=availability_in.settings.appointment_duration,
        break_between_appointments=availability_in.settings.break_between_appointments,
    )

    await AvailabilityService.replace_all_rules(db, provider_id, rules, slot_settings)
    return SaveAvailabilityResponse(success=True)


@router.get("/{provider_id}/slots", response_model=OpenSlotsResponse)
async def get_open_slots(
    provider_id: UUID,
    start_date: date = Query(..., alias="date"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Get bookable windows for a date or an inclusive date range.
    Windows already taken by active bookings are left out.
    """
    provider = await AvailabilityService.get_provider(db, provider_id)
    days = await AvailabilityService.open_slots_for_range(db, provider, start_date, end_date)

    return OpenSlotsResponse(
        provider_id=provider.id,
        timezone=AvailabilityService.provider_timezone(provider).zone,
        days=[
            DaySlots(
                date=day,
                slots=[SlotWindow(start_time=w.start_time, end_time=w.end_time) for w in windows],
            )
            for day, windows in days.items()
        ],
    )
