"""
Database Seed Script - Demo Data for Smart Connect & Hire

This script creates demo data including:
- 3 Providers, each with a service, weekday availability and settings
- 2 Seekers

Usage:
    python -m scripts.seed_demo

Or from project root:
    cd backend && python -m scripts.seed_demo
"""

import asyncio

from smartconnect.core.permissions import UserRole
from smartconnect.core.security import get_password_hash
from smartconnect.db.database import async_session_maker, create_tables
from smartconnect.models.service import Service
from smartconnect.models.user import User
from smartconnect.scheduling.rules import SlotSettings, make_rule
from smartconnect.services.availability_service import AvailabilityService


# Demo data
PROVIDERS = [
    {
        "name": "Ana Plumbing",
        "email": "ana@plumbing.example.com",
        "timezone": "America/Chicago",
        "service": {"title": "Leak repair", "category": "Plumbing", "pricing": "$80/hour"},
        "hours": ("09:00", "17:00"),
        "settings": SlotSettings(booking_notice=24, appointment_duration=60, break_between_appointments=15),
    },
    {
        "name": "Ben Tutoring",
        "email": "ben@tutoring.example.com",
        "timezone": "Europe/London",
        "service": {"title": "Maths tutoring", "category": "Education", "pricing": "£30/session"},
        "hours": ("15:00", "20:00"),
        "settings": SlotSettings(booking_notice=12, appointment_duration=45, break_between_appointments=15),
    },
    {
        "name": "Chloe Design",
        "email": "chloe@design.example.com",
        "timezone": "Asia/Kolkata",
        "service": {"title": "Logo consultation", "category": "Design", "pricing": "₹2000"},
        "hours": ("10:00", "13:00"),
        "settings": SlotSettings(booking_notice=48, appointment_duration=30, break_between_appointments=0),
    },
]

SEEKERS = [
    ("Dan Seeker", "dan@seeker.example.com"),
    ("Eve Seeker", "eve@seeker.example.com"),
]

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


async def seed_database():
    await create_tables()

    async with async_session_maker() as session:
        print("Starting database seeding...")

        # 1. Providers with services and availability
        print("\n[1/2] Creating Providers...")
        for p_data in PROVIDERS:
            provider = User(
                email=p_data["email"],
                password_hash=get_password_hash("provider123"),
                name=p_data["name"],
                user_type=UserRole.PROVIDER,
                timezone=p_data["timezone"],
                is_active=True,
            )
            session.add(provider)
            await session.flush()

            session.add(Service(provider_id=provider.id, **p_data["service"]))

            start, end = p_data["hours"]
            rules = [make_rule(start, end, day_of_week=day) for day in WEEKDAYS]
            await AvailabilityService.replace_all_rules(session, provider.id, rules, p_data["settings"])
            print(f"   Created: {provider.email} ({start}-{end} weekdays, {p_data['timezone']})")

        # 2. Seekers
        print("\n[2/2] Creating Seekers...")
        for name, email in SEEKERS:
            seeker = User(
                email=email,
                password_hash=get_password_hash("seeker123"),
                name=name,
                user_type=UserRole.SEEKER,
                is_active=True,
            )
            session.add(seeker)
            print(f"   Created: {seeker.email}")

        # Commit all changes
        await session.commit()

        print("\n" + "=" * 50)
        print("SEEDING COMPLETE!")
        print("=" * 50)
        print(f"\nCreated:")
        print(f"  - {len(PROVIDERS)} Providers")
        print(f"  - {len(SEEKERS)} Seekers")
        print(f"\nLogin Credentials:")
        print(f"  Provider:  ana@plumbing.example.com / provider123")
        print(f"  Seeker:    dan@seeker.example.com / seeker123")
        print()


if __name__ == "__main__":
    asyncio.run(seed_database())
