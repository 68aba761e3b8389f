"""
Authentication Schemas
"""
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from smartconnect.core.permissions import UserRole
from smartconnect.schemas.base import CamelModel


class SignupRequest(CamelModel):
    """Signup request schema"""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    user_type: UserRole
    timezone: Optional[str] = Field(None, max_length=100)


class LoginRequest(CamelModel):
    """Login request schema"""
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    """Public user profile"""
    id: UUID
    name: str
    email: str
    user_type: UserRole
    timezone: Optional[str] = None
    image: Optional[str] = None


class Token(CamelModel):
    """Token response"""
    access_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None
