"""
Auth Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the authentication domain.
"""

from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.tenants.dtos import TenantResponse
from src.app.use_cases.users.dtos import UserResponse


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterTenantCommand(BaseModel):
    """Register a new tenant together with its first admin"""

    tenant_name: str
    subdomain: str
    admin_email: str
    admin_password: str
    admin_full_name: str


class LoginCommand(BaseModel):
    """
    Login command.

    With tenant_subdomain or tenant_id the login is scoped to that tenant,
    without either it is a super admin login.
    """

    email: str
    password: str
    tenant_subdomain: Optional[str] = None
    tenant_id: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterTenantResponse(BaseModel):
    """Response for register tenant use case"""

    tenant: TenantResponse
    admin_user: UserResponse


class LoginResponse(BaseModel):
    """Response for login use case"""

    user: UserResponse
    tenant: Optional[TenantResponse] = None
    token: str
    expires_in: int
