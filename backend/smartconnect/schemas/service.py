"""
Pydantic Schemas for Services
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from smartconnect.schemas.base import CamelModel


class ServiceCreate(CamelModel):
    """Schema for listing a new service"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[str] = Field(None, max_length=100)
    pricing: Optional[str] = Field(None, max_length=100)


class ServiceResponse(CamelModel):
    id: UUID
    provider_id: UUID
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    pricing: Optional[str] = None
    created_at: datetime


class ServiceResult(CamelModel):
    """Result of creating a service"""
    success: bool = True
    service: ServiceResponse


class ServiceListResponse(CamelModel):
    services: List[ServiceResponse]
