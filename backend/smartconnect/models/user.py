"""
User Model
"""
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, Enum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartconnect.core.permissions import UserRole
from smartconnect.core.timezone import utc_now
from smartconnect.db.database import Base

if TYPE_CHECKING:
    from smartconnect.models.availability import AvailabilityRule, AvailabilitySettings
    from smartconnect.models.service import Service


class User(Base):
    """User model - service providers and service seekers"""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user_type: Mapped[UserRole] = mapped_column(
        Enum(UserRole, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=UserRole.SEEKER
    )

    # IANA name; availability and booking times of a provider are local to it
    timezone: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )

    # Relationships - use lazy="noload" to avoid N+1 queries
    services: Mapped[List["Service"]] = relationship(
        "Service",
        back_populates="provider",
        lazy="noload"
    )
    availability_rules: Mapped[List["AvailabilityRule"]] = relationship(
        "AvailabilityRule",
        back_populates="provider",
        lazy="noload"
    )
    availability_settings: Mapped[Optional["AvailabilitySettings"]] = relationship(
        "AvailabilitySettings",
        back_populates="provider",
        lazy="noload",
        uselist=False
    )

    @property
    def is_provider(self) -> bool:
        return self.user_type == UserRole.PROVIDER

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.user_type.value})>"
