"""
Booking Model - a seeker's appointment with a provider
"""
import uuid
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum as SQLEnum, ForeignKey, Index, Text, Time, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartconnect.core.timezone import utc_now
from smartconnect.db.database import Base
from smartconnect.scheduling.conflicts import BookedRange
from smartconnect.scheduling.status import BookingStatus
from smartconnect.scheduling.windows import TimeWindow, parse_hhmm

if TYPE_CHECKING:
    from smartconnect.models.service import Service
    from smartconnect.models.user import User

_ACTIVE = text("status != 'cancelled'")


class Booking(Base):
    """
    Booking of one time window on one date.

    Cancelled bookings are kept for history and are ignored by availability.
    """

    __tablename__ = "bookings"
    __table_args__ = (
        # At most one active booking may start at a given provider/date/time
        Index(
            "uq_bookings_active_window",
            "provider_id",
            "booking_date",
            "start_time",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    seeker_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    booking_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(BookingStatus, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True
    )

    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    # Relationships
    seeker: Mapped["User"] = relationship(
        "User",
        foreign_keys=[seeker_id],
        lazy="noload"
    )
    provider: Mapped["User"] = relationship(
        "User",
        foreign_keys=[provider_id],
        lazy="noload"
    )
    service: Mapped["Service"] = relationship(
        "Service",
        lazy="noload"
    )

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(parse_hhmm(self.start_time), parse_hhmm(self.end_time))

    def to_booked_range(self) -> BookedRange:
        return BookedRange(window=self.window, status=self.status)

    def __repr__(self) -> str:
        return f"<Booking {self.booking_date} {self.start_time}-{self.end_time} ({self.status.value})>"
