"""
Service Endpoints
"""
from typing import Any
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.api import deps
from smartconnect.core.permissions import RequestContext
from smartconnect.db.database import get_db
from smartconnect.schemas.service import (
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceResult,
)
from smartconnect.services.service_service import ServiceService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ServiceResult, status_code=status.HTTP_201_CREATED)
async def create_service(
    service_in: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """
    List a new service. Only providers can list services, and the
    service always belongs to the caller.
    """
    service = await ServiceService.create_service(db, ctx, service_in)
    return ServiceResult(service=ServiceResponse.model_validate(service))


@router.get("/provider/{provider_id}", response_model=ServiceListResponse)
async def list_provider_services(
    provider_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Public list of a provider's services."""
    services = await ServiceService.list_for_provider(db, provider_id)
    return ServiceListResponse(
        services=[ServiceResponse.model_validate(s) for s in services]
    )


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Any:
    service = await ServiceService.get_service(db, service_id)
    return ServiceResponse.model_validate(service)
