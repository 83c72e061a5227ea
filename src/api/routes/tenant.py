from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants import (
    AddUserCommand,
    AddUserUseCase,
    GetTenantUseCase,
    ListTenantUsersUseCase,
    ListTenantsUseCase,
    TenantDetailResponse,
    TenantResponse,
    UpdateTenantCommand,
    UpdateTenantUseCase,
)
from src.app.use_cases.users import UserResponse
from src.depends import get_current_principal, get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class TenantsListResponse(BaseModel):
    """GET /tenants response payload"""

    tenants: List[TenantDetailResponse]
    total: int


@router.get("", status_code=status.HTTP_200_OK, response_model=TenantsListResponse)
async def list_tenants(
    status_filter: Optional[str] = Query(None, alias="status"),
    plan: Optional[str] = Query(None, alias="subscription_plan"),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List every tenant (super admin only).

    Raises:
        - 403 Forbidden: Caller is not a super admin
        - 400 Bad Request: Unknown status or plan filter
    """
    result = await ListTenantsUseCase(uow).execute(
        principal, status=status_filter, plan=plan
    )

    if result.is_err():
        raise_for_error(result.error)

    return TenantsListResponse(tenants=result.value, total=len(result.value))


@router.get(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantDetailResponse
)
async def get_tenant(
    tenant_id: UUID,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Tenant details with totals.

    Raises:
        - 404 Not Found: Unknown tenant, or another tenant's id
    """
    result = await GetTenantUseCase(uow).execute(principal, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateTenantRequest(BaseModel):
    """
    Update tenant HTTP request payload

    status, subscription_plan, max_users and max_projects are super admin only.
    """

    name: Optional[str] = Field(None, max_length=255)
    status: Optional[str] = None
    subscription_plan: Optional[str] = None
    max_users: Optional[int] = None
    max_projects: Optional[int] = None


@router.put(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantResponse
)
async def update_tenant(
    tenant_id: UUID,
    request: UpdateTenantRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a tenant.

    Raises:
        - 400 Bad Request: No fields, invalid values, or limits below current counts
        - 403 Forbidden: Not allowed to change these fields
        - 404 Not Found: Unknown tenant, or another tenant's id
    """
    # Only the fields the client actually sent
    command = UpdateTenantCommand(**request.model_dump(exclude_unset=True))

    result = await UpdateTenantUseCase(uow).execute(principal, tenant_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class AddUserRequest(BaseModel):
    """Add user HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password (min 8 chars)")
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Optional[str] = Field(None, description="tenant_admin or user (default)")


@router.post(
    "/{tenant_id}/users",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
)
async def add_user(
    tenant_id: UUID,
    request: AddUserRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add a user to a tenant.

    Raises:
        - 400 Bad Request: Invalid role or password
        - 403 Forbidden: Caller is not an admin of the tenant
        - 404 Not Found: Unknown tenant, or another tenant's id
        - 409 Conflict: Email already exists, or user limit reached
    """
    command = AddUserCommand(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        role=request.role,
    )

    result = await AddUserUseCase(uow).execute(principal, tenant_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class TenantUsersResponse(BaseModel):
    """GET /tenants/{tenant_id}/users response payload"""

    users: List[UserResponse]
    total: int


@router.get(
    "/{tenant_id}/users",
    status_code=status.HTTP_200_OK,
    response_model=TenantUsersResponse,
)
async def list_tenant_users(
    tenant_id: UUID,
    search: Optional[str] = Query(None, description="Match on email or full name"),
    role: Optional[str] = Query(None),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List the users of a tenant.

    Raises:
        - 404 Not Found: Unknown tenant, or another tenant's id
    """
    result = await ListTenantUsersUseCase(uow).execute(
        principal, tenant_id, search=search, role=role
    )

    if result.is_err():
        raise_for_error(result.error)

    return TenantUsersResponse(users=result.value, total=len(result.value))
