"""
API v1 Router - combines all route modules
"""
from fastapi import APIRouter

from smartconnect.api.v1.endpoints import auth, availability, bookings, services

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(services.router, prefix="/services", tags=["Services"])
api_router.include_router(availability.router, prefix="/availability", tags=["Availability"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
