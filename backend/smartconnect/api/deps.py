"""
API Dependencies
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartconnect.core.exceptions import AuthenticationError
from smartconnect.core.permissions import RequestContext
from smartconnect.core.security import verify_token
from smartconnect.db.database import get_db
from smartconnect.models.user import User

# Security scheme; missing credentials are reported by get_request_context
security = HTTPBearer(auto_error=False)


async def _resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials],
    db: AsyncSession,
) -> Optional[User]:
    if credentials is None:
        return None

    payload = verify_token(credentials.credentials, token_type="access")
    if not payload:
        return None

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        return None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get the current authenticated user from JWT token"""
    user = await _resolve_user(credentials, db)
    if not user:
        raise AuthenticationError("Unauthorized")
    return user


async def get_request_context(
    current_user: User = Depends(get_current_user),
) -> RequestContext:
    """Identity of the caller, passed into every engine operation"""
    return RequestContext(actor_id=current_user.id, role=current_user.user_type)
