"""
Service Service - services listed by providers
"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from smartconnect.core.permissions import RequestContext
from smartconnect.models.service import Service
from smartconnect.schemas.service import ServiceCreate
from smartconnect.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


def _clean(value):
    if value is None:
        return None
    value = value.strip()
    return value or None


class ServiceService:
    """Service for provider service listings"""

    @staticmethod
    async def create_service(db: AsyncSession, ctx: RequestContext, data: ServiceCreate) -> Service:
        """
        List a new service for the calling provider.

        Raises:
            AuthorizationError: the caller is not a provider.
            ValidationError: the title is blank.
        """
        if not ctx.is_provider:
            raise AuthorizationError("Only providers can list services")

        title = _clean(data.title)
        if not title:
            raise ValidationError("Service title is required")

        service = Service(
            provider_id=ctx.actor_id,
            title=title,
            description=_clean(data.description),
            category=_clean(data.category),
            pricing=_clean(data.pricing),
        )
        db.add(service)
        await db.flush()

        logger.info("Provider %s listed service %s (%s)", ctx.actor_id, service.id, title)
        return service

    @staticmethod
    async def get_service(db: AsyncSession, service_id: UUID) -> Service:
        result = await db.execute(select(Service).where(Service.id == service_id))
        service = result.scalar_one_or_none()
        if not service:
            raise NotFoundError("Service not found")
        return service

    @staticmethod
    async def list_for_provider(db: AsyncSession, provider_id: UUID) -> List[Service]:
        """Services of an active provider, oldest first."""
        await AvailabilityService.get_provider(db, provider_id)
        result = await db.execute(
            select(Service)
            .where(Service.provider_id == provider_id)
            .order_by(Service.created_at.asc())
        )
        return list(result.scalars().all())
