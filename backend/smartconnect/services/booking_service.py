"""
Booking Service - creation and status lifecycle of bookings
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from smartconnect.core.permissions import RequestContext
from smartconnect.models.booking import Booking
from smartconnect.models.service import Service
from smartconnect.scheduling.conflicts import is_window_free
from smartconnect.scheduling.status import BookingParty, BookingStatus, check_transition
from smartconnect.scheduling.windows import TimeWindow, minutes_to_time
from smartconnect.schemas.booking import BookingCreate
from smartconnect.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


class BookingService:
    """Service for booking records"""

    @staticmethod
    async def list_active_bookings(db: AsyncSession, provider_id: UUID, day: date) -> List[Booking]:
        """Non-cancelled bookings of a provider on a date, ordered by start."""
        return await AvailabilityService.active_bookings(db, provider_id, day)

    @staticmethod
    async def get_booking(db: AsyncSession, booking_id: UUID) -> Booking:
        result = await db.execute(select(Booking).where(Booking.id == booking_id))
        booking = result.scalar_one_or_none()
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    @staticmethod
    def party_of(ctx: RequestContext, booking: Booking) -> BookingParty:
        """Which side of the booking the actor is on, or AuthorizationError."""
        if ctx.actor_id == booking.provider_id:
            return BookingParty.PROVIDER
        if ctx.actor_id == booking.seeker_id:
            return BookingParty.SEEKER
        raise AuthorizationError("Not authorized to access this booking")

    @staticmethod
    async def get_booking_for(db: AsyncSession, ctx: RequestContext, booking_id: UUID) -> Booking:
        booking = await BookingService.get_booking(db, booking_id)
        BookingService.party_of(ctx, booking)
        return booking

    @staticmethod
    async def list_for_provider(db: AsyncSession, ctx: RequestContext, provider_id: UUID) -> List[Booking]:
        if ctx.actor_id != provider_id:
            raise AuthorizationError("You can only list your own bookings")
        result = await db.execute(
            select(Booking)
            .where(Booking.provider_id == provider_id)
            .order_by(Booking.booking_date.desc(), Booking.start_time.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_for_seeker(db: AsyncSession, ctx: RequestContext, seeker_id: UUID) -> List[Booking]:
        if ctx.actor_id != seeker_id:
            raise AuthorizationError("You can only list your own bookings")
        result = await db.execute(
            select(Booking)
            .where(Booking.seeker_id == seeker_id)
            .order_by(Booking.booking_date.desc(), Booking.start_time.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_booking(
        db: AsyncSession,
        ctx: RequestContext,
        data: BookingCreate,
        now: Optional[datetime] = None,
    ) -> Booking:
        """
        Book one open window for the actor.

        The exact requested window must be one the provider's rules generate
        for the date, and it must not overlap an active booking. The insert
        itself is guarded by the partial unique index on active bookings.

        Raises:
            ValidationError: missing or malformed fields, unknown service,
                or an attempt to book yourself.
            NotFoundError: the provider does not exist.
            ConflictError: the window is not (or no longer) open.
        """
        missing = data.missing_fields()
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        try:
            window = TimeWindow.from_strings(data.start_time, data.end_time)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        if window.start >= window.end:
            raise ValidationError("startTime must be before endTime")

        if ctx.actor_id == data.provider_id:
            raise ValidationError("You cannot book your own service")

        provider = await AvailabilityService.get_provider(db, data.provider_id)
        provider_id = provider.id

        result = await db.execute(
            select(Service).where(
                Service.id == data.service_id,
                Service.provider_id == provider_id,
            )
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError("Service not found for this provider")

        candidates = await AvailabilityService.candidate_slots(db, provider, data.booking_date, now=now)
        if window not in candidates:
            logger.warning(
                "Rejected booking of %s on %s for provider %s: slot not offered",
                window, data.booking_date, provider_id
            )
            raise ConflictError("The selected time slot is no longer available")

        active = await AvailabilityService.active_bookings(db, provider_id, data.booking_date)
        if not is_window_free(window, [b.to_booked_range() for b in active]):
            logger.warning(
                "Rejected booking of %s on %s for provider %s: slot already booked",
                window, data.booking_date, provider_id
            )
            raise ConflictError("The selected time slot is no longer available")

        booking = Booking(
            seeker_id=ctx.actor_id,
            provider_id=provider_id,
            service_id=data.service_id,
            booking_date=data.booking_date,
            start_time=minutes_to_time(window.start),
            end_time=minutes_to_time(window.end),
            status=BookingStatus.PENDING,
            notes=data.notes or "",
        )
        db.add(booking)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(
                "Concurrent booking of %s on %s for provider %s",
                window, data.booking_date, provider_id
            )
            raise ConflictError("The selected time slot is no longer available") from e

        logger.info(
            "Created booking %s: seeker %s with provider %s on %s %s",
            booking.id, ctx.actor_id, provider_id, data.booking_date, window
        )
        return booking

    @staticmethod
    async def set_status(
        db: AsyncSession,
        ctx: RequestContext,
        booking_id: UUID,
        new_status: BookingStatus,
    ) -> Booking:
        """
        Apply a status transition on behalf of one party of the booking.

        Raises:
            NotFoundError: no such booking.
            AuthorizationError: the actor is not a party, or the move belongs
                to the other party.
            InvalidStateError: the booking is terminal or the move is not
                part of the lifecycle.
        """
        booking = await BookingService.get_booking(db, booking_id)
        party = BookingService.party_of(ctx, booking)

        check_transition(booking.status, new_status, party)

        old_status = booking.status
        booking.status = new_status
        await db.flush()

        logger.info(
            "Booking %s moved from %s to %s by %s %s",
            booking.id, old_status.value, new_status.value, party.value, ctx.actor_id
        )
        return booking
