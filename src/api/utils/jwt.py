from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, tenant_id: Optional[UUID], role: str) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        tenant_id: Tenant UUID, None for the super admin
        role: User role (super_admin, tenant_admin, user)

    Returns:
        JWT token string (HS256, JWT_EXPIRES_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "tenant_id": str(tenant_id) if tenant_id is not None else None,
        "role": role,
        "exp": now + timedelta(minutes=ApplicationConfig.JWT_EXPIRES_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def token_expires_in() -> int:
    """Access token lifetime in seconds"""
    return ApplicationConfig.JWT_EXPIRES_MINUTES * 60


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
