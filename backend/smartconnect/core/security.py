"""
Password hashing and access tokens for providers and seekers

Tokens carry the user id as ``sub`` and the user type as ``role``; both are
required for a token to be accepted.
"""
from datetime import timedelta
from typing import Any, Optional

import bcrypt
from jose import JWTError, jwt

from smartconnect.core.config import settings
from smartconnect.core.timezone import utc_now

ACCESS_TOKEN_TYPE = "access"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_access_token(
    subject: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[dict[str, Any]] = None
) -> str:
    """Create JWT access token carrying the user id and user type"""
    expire = utc_now() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    claims = dict(additional_claims or {})
    # Identity claims always win over extra profile claims
    claims.update({
        "sub": subject,
        "role": role,
        "exp": expire,
        "type": ACCESS_TOKEN_TYPE,
    })
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """Decoded payload, or None if the signature or expiry check fails"""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def verify_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> Optional[dict[str, Any]]:
    """Payload of a valid token of the given type that names a user and a role"""
    payload = decode_token(token)
    if payload is None or payload.get("type") != token_type:
        return None
    if not payload.get("sub") or not payload.get("role"):
        return None
    return payload
