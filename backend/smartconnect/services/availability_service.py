"""
Availability Service - provider rules, settings and open slots
"""
import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.core.config import settings as app_settings
from smartconnect.core.exceptions import NotFoundError, StoreError, ValidationError
from smartconnect.core.permissions import UserRole
from smartconnect.core.timezone import get_timezone
from smartconnect.models.availability import AvailabilityRule, AvailabilitySettings
from smartconnect.models.booking import Booking, BookingStatus
from smartconnect.models.user import User
from smartconnect.scheduling.conflicts import filter_available
from smartconnect.scheduling.rules import AvailabilityRule as EngineRule, SlotSettings, validate_rules
from smartconnect.scheduling.slots import generate_slots
from smartconnect.scheduling.windows import TimeWindow

logger = logging.getLogger(__name__)


def default_settings() -> SlotSettings:
    return SlotSettings(
        booking_notice=app_settings.default_booking_notice,
        appointment_duration=app_settings.default_appointment_duration,
        break_between_appointments=app_settings.default_break_between_appointments,
    )


class AvailabilityService:
    """Service for provider availability."""

    @staticmethod
    async def get_provider(db: AsyncSession, provider_id: UUID) -> User:
        """Load an active provider or raise NotFoundError."""
        result = await db.execute(
            select(User).where(
                User.id == provider_id,
                User.user_type == UserRole.PROVIDER,
                User.is_active == True,
            )
        )
        provider = result.scalar_one_or_none()
        if not provider:
            raise NotFoundError("Provider not found")
        return provider

    @staticmethod
    def provider_timezone(provider: User):
        return get_timezone(provider.timezone or app_settings.default_timezone)

    @staticmethod
    async def list_rules(db: AsyncSession, provider_id: UUID) -> List[AvailabilityRule]:
        result = await db.execute(
            select(AvailabilityRule)
            .where(AvailabilityRule.provider_id == provider_id)
            .order_by(AvailabilityRule.recurring_weekly.desc(), AvailabilityRule.start_time)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_settings(db: AsyncSession, provider_id: UUID) -> SlotSettings:
        """Return the provider's settings, or the configured defaults if never saved."""
        result = await db.execute(
            select(AvailabilitySettings).where(AvailabilitySettings.provider_id == provider_id)
        )
        row = result.scalar_one_or_none()
        return row.to_settings() if row else default_settings()

    @staticmethod
    async def set_settings(
        db: AsyncSession,
        provider_id: UUID,
        slot_settings: SlotSettings,
    ) -> AvailabilitySettings:
        """Insert or update the provider's settings row."""
        result = await db.execute(
            select(AvailabilitySettings).where(AvailabilitySettings.provider_id == provider_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = AvailabilitySettings(provider_id=provider_id)
            db.add(row)
        row.booking_notice = slot_settings.booking_notice
        row.appointment_duration = slot_settings.appointment_duration
        row.break_between_appointments = slot_settings.break_between_appointments
        await db.flush()
        return row

    @staticmethod
    async def replace_all_rules(
        db: AsyncSession,
        provider_id: UUID,
        rules: Sequence[EngineRule],
        slot_settings: Optional[SlotSettings] = None,
    ) -> List[AvailabilityRule]:
        """
        Replace the provider's whole rule set (and optionally settings).

        The batch is validated before anything is written. Delete and
        re-create run in the caller's transaction; on a database error the
        transaction is rolled back, so the previous rules survive.

        Raises:
            ValidationError: if the batch has overlapping or inverted rules.
            StoreError: if the database rejects the write.
        """
        validate_rules(rules)

        try:
            await db.execute(
                delete(AvailabilityRule).where(AvailabilityRule.provider_id == provider_id)
            )
            new_rules = [AvailabilityRule.from_rule(provider_id, rule) for rule in rules]
            db.add_all(new_rules)
            await db.flush()
            if slot_settings is not None:
                await AvailabilityService.set_settings(db, provider_id, slot_settings)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Failed to replace availability for provider %s", provider_id)
            raise StoreError("Failed to update availability") from e

        logger.info("Replaced availability for provider %s with %d rules", provider_id, len(new_rules))
        return new_rules

    @staticmethod
    async def active_bookings(db: AsyncSession, provider_id: UUID, day: date) -> List[Booking]:
        result = await db.execute(
            select(Booking)
            .where(
                Booking.provider_id == provider_id,
                Booking.booking_date == day,
                Booking.status != BookingStatus.CANCELLED,
            )
            .order_by(Booking.start_time)
        )
        return list(result.scalars().all())

    @staticmethod
    async def candidate_slots(
        db: AsyncSession,
        provider: User,
        day: date,
        now: Optional[datetime] = None,
    ) -> List[TimeWindow]:
        """Windows the provider's rules and settings generate for ``day``, booked or not."""
        rules = [row.to_rule() for row in await AvailabilityService.list_rules(db, provider.id)]
        slot_settings = await AvailabilityService.get_settings(db, provider.id)
        return generate_slots(
            day,
            rules,
            slot_settings,
            now=now,
            tz=AvailabilityService.provider_timezone(provider),
        )

    @staticmethod
    async def open_slots(
        db: AsyncSession,
        provider: User,
        day: date,
        now: Optional[datetime] = None,
    ) -> List[TimeWindow]:
        """
        Windows of ``day`` that are generated by the provider's rules and
        not taken by an active booking.
        """
        candidates = await AvailabilityService.candidate_slots(db, provider, day, now=now)
        if not candidates:
            return []
        bookings = await AvailabilityService.active_bookings(db, provider.id, day)
        return filter_available(candidates, [b.to_booked_range() for b in bookings])

    @staticmethod
    async def open_slots_for_range(
        db: AsyncSession,
        provider: User,
        start_date: date,
        end_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Dict[date, List[TimeWindow]]:
        """
        Open windows for every date from start_date to end_date inclusive.

        Raises:
            ValidationError: if the range is inverted or longer than the
                configured maximum.
        """
        end_date = end_date or start_date
        if end_date < start_date:
            raise ValidationError("endDate must not be before date")
        span = (end_date - start_date).days + 1
        if span > app_settings.max_slot_range_days:
            raise ValidationError(
                f"Date range too long ({span} days, max {app_settings.max_slot_range_days})"
            )

        result = {}
        current = start_date
        while current <= end_date:
            result[current] = await AvailabilityService.open_slots(db, provider, current, now=now)
            current += timedelta(days=1)
        return result
