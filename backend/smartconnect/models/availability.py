"""
Availability Models - provider opening hours and booking settings
"""
import uuid
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Date, DateTime, Enum, ForeignKey, Integer, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartconnect.core.timezone import utc_now
from smartconnect.db.database import Base
from smartconnect.scheduling.rules import (
    AvailabilityRule as EngineRule,
    RecurringRule,
    SlotSettings,
    SpecificDateRule,
    Weekday,
)
from smartconnect.scheduling.windows import minutes_to_time, parse_hhmm

if TYPE_CHECKING:
    from smartconnect.models.user import User


class AvailabilityRule(Base):
    """
    One weekly recurring or one specific-date availability statement.

    Rows are never edited in place: saving availability replaces the
    provider's whole set.
    """

    __tablename__ = "availability_rules"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    day_of_week: Mapped[Weekday] = mapped_column(
        Enum(Weekday, values_callable=lambda x: [e.value for e in x]),
        nullable=False
    )

    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    recurring_weekly: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Only set when recurring_weekly is false
    specific_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    provider: Mapped["User"] = relationship(
        "User",
        back_populates="availability_rules",
        lazy="noload"
    )

    @classmethod
    def from_rule(cls, provider_id: uuid.UUID, rule: EngineRule) -> "AvailabilityRule":
        return cls(
            provider_id=provider_id,
            day_of_week=rule.day_of_week,
            start_time=minutes_to_time(rule.start),
            end_time=minutes_to_time(rule.end),
            is_available=rule.is_available,
            recurring_weekly=rule.recurring_weekly,
            specific_date=None if rule.recurring_weekly else rule.specific_date,
        )

    def to_rule(self) -> EngineRule:
        """Convert the row into the engine's tagged rule variant."""
        start = parse_hhmm(self.start_time)
        end = parse_hhmm(self.end_time)
        if self.recurring_weekly:
            return RecurringRule(
                day_of_week=self.day_of_week,
                start=start,
                end=end,
                is_available=self.is_available,
            )
        return SpecificDateRule(
            specific_date=self.specific_date,
            start=start,
            end=end,
            is_available=self.is_available,
            day_of_week=self.day_of_week,
        )

    def __repr__(self) -> str:
        when = self.day_of_week.value if self.recurring_weekly else self.specific_date
        return f"<AvailabilityRule {self.provider_id} {when} {self.start_time}-{self.end_time}>"


class AvailabilitySettings(Base):
    """Booking settings, one row per provider"""

    __tablename__ = "availability_settings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )

    booking_notice: Mapped[int] = mapped_column(Integer, nullable=False, default=24)  # hours
    appointment_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=60)  # minutes
    break_between_appointments: Mapped[int] = mapped_column(Integer, nullable=False, default=15)  # minutes

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    provider: Mapped["User"] = relationship(
        "User",
        back_populates="availability_settings",
        lazy="noload"
    )

    def to_settings(self) -> SlotSettings:
        return SlotSettings(
            booking_notice=self.booking_notice,
            appointment_duration=self.appointment_duration,
            break_between_appointments=self.break_between_appointments,
        )

    def __repr__(self) -> str:
        return (
            f"<AvailabilitySettings {self.provider_id} "
            f"{self.appointment_duration}m+{self.break_between_appointments}m>"
        )
