"""
Booking Endpoints
"""
from typing import Any, List, Optional
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.api import deps
from smartconnect.core.exceptions import ValidationError
from smartconnect.core.permissions import RequestContext
from smartconnect.db.database import get_db
from smartconnect.scheduling.windows import parse_date
from smartconnect.schemas.booking import (
    BookedWindow,
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingResult,
    BookingStatusUpdate,
)
from smartconnect.services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check-availability", response_model=List[BookedWindow])
async def check_availability(
    provider: Optional[str] = Query(None, alias="providerId"),
    day: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Time ranges already held by active bookings of a provider on a date.
    """
    if not provider or not day:
        raise ValidationError("Missing required parameters: providerId and date")
    try:
        provider_id = UUID(provider)
    except ValueError:
        raise ValidationError(f"Invalid providerId: {provider}") from None
    try:
        booking_date = parse_date(day)
    except ValueError as e:
        raise ValidationError(str(e)) from None

    bookings = await BookingService.list_active_bookings(db, provider_id, booking_date)
    return [
        BookedWindow(start_time=b.window.start_time, end_time=b.window.end_time)
        for b in bookings
    ]


@router.post("", response_model=BookingResult)
async def create_booking(
    booking_in: BookingCreate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """
    Book an open window with a provider.
    The booking starts out pending until the provider confirms it.
    """
    booking = await BookingService.create_booking(db, ctx, booking_in)
    return BookingResult(success=True, booking=BookingResponse.model_validate(booking))


@router.get("/provider/{user_id}", response_model=BookingListResponse)
async def list_provider_bookings(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """Bookings received by a provider, newest date first."""
    bookings = await BookingService.list_for_provider(db, ctx, user_id)
    return BookingListResponse(bookings=[BookingResponse.model_validate(b) for b in bookings])


@router.get("/seeker/{user_id}", response_model=BookingListResponse)
async def list_seeker_bookings(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """Bookings made by a seeker, newest date first."""
    bookings = await BookingService.list_for_seeker(db, ctx, user_id)
    return BookingListResponse(bookings=[BookingResponse.model_validate(b) for b in bookings])


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    return await BookingService.get_booking_for(db, ctx, booking_id)


@router.patch("/{booking_id}", response_model=BookingResult)
async def update_booking_status(
    booking_id: UUID,
    status_in: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """
    Move a booking to a new status.

    Providers confirm, decline, or complete; seekers cancel.
    """
    booking = await BookingService.set_status(db, ctx, booking_id, status_in.status)
    return BookingResult(success=True, booking=BookingResponse.model_validate(booking))
