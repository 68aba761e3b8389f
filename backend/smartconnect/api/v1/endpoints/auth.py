"""
Authentication Endpoints
"""
from datetime import timedelta
from typing import Any
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.api import deps
from smartconnect.core.config import settings
from smartconnect.core.security import create_access_token, get_password_hash, verify_password
from smartconnect.db.database import get_db
from smartconnect.models.user import User
from smartconnect.schemas.auth import LoginRequest, SignupRequest, Token, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_for(user: User) -> Token:
    access_token = create_access_token(
        subject=str(user.id),
        role=user.user_type.value,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        additional_claims={"name": user.name, "email": user.email},
    )
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=Token)
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """
    Exchange email and password for a bearer token
    """
    # Case-insensitive email lookup
    result = await db.execute(
        select(User).where(func.lower(User.email) == login_data.email.strip().lower())
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(login_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User account is inactive"
        )

    return _token_for(user)


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
async def signup(
    *,
    db: AsyncSession = Depends(get_db),
    signup_data: SignupRequest
) -> Any:
    """
    Create a provider or seeker account and log it in
    """
    email = signup_data.email.strip().lower()
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = User(
        email=email,
        password_hash=get_password_hash(signup_data.password),
        name=signup_data.name,
        user_type=signup_data.user_type,
        timezone=signup_data.timezone,
        is_active=True
    )
    db.add(user)
    await db.flush()

    logger.info("New %s account %s", user.user_type.value, user.id)
    return _token_for(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """
    Get current user information
    """
    return UserResponse.model_validate(current_user)
