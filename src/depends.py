from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import ApplicationConfig
from libs.result import Error
from src.adapter.database import build_engine, build_session_factory
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.errors import UNAUTHORIZED
from src.domain.entities import UserRole
from src.domain.principal import Principal

engine = build_engine(ApplicationConfig.DB_URI, echo=ApplicationConfig.SQL_ECHO)

AsyncSessionLocal = build_session_factory(engine)

# Missing header is answered by get_current_user with the service's error body
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def _unauthorized(message: str) -> ClientError:
    return ClientError(
        Error(UNAUTHORIZED, message), status_code=status.HTTP_401_UNAUTHORIZED
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, tenant_id, role

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    if credentials is None:
        raise _unauthorized("Missing bearer token")

    payload = verify_jwt(credentials.credentials)

    if payload is None:
        raise _unauthorized("Invalid or expired token")

    return payload


async def get_current_principal(
    current_user: dict = Depends(get_current_user),
) -> Principal:
    """
    Resolve the verified JWT payload into a Principal.

    Raises:
        ClientError: 401 if the claims are malformed
    """
    try:
        tenant_id = current_user.get("tenant_id")
        return Principal(
            user_id=UUID(current_user["user_id"]),
            tenant_id=UUID(tenant_id) if tenant_id else None,
            role=UserRole(current_user["role"]),
        )
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid or expired token")
