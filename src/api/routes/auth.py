from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    RegisterTenantCommand,
    RegisterTenantResponse,
    RegisterTenantUseCase,
)
from src.app.use_cases.users import LoadContextUseCase, MeResponse
from src.depends import get_current_principal, get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterTenantRequest(BaseModel):
    """
    Register tenant HTTP request payload

    Validates incoming HTTP request before converting to RegisterTenantCommand.
    Subdomain format and password length are business rules checked by the
    use case.
    """

    tenant_name: str = Field(..., min_length=1, max_length=255, description="Company name")
    subdomain: str = Field(..., description="Unique subdomain (3-63 chars)")
    admin_email: EmailStr = Field(..., description="First tenant admin email")
    admin_password: str = Field(..., description="First tenant admin password (min 8 chars)")
    admin_full_name: str = Field(..., min_length=1, max_length=255)


@router.post(
    "/register-tenant",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterTenantResponse,
)
async def register_tenant(
    request: RegisterTenantRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Register a tenant and its first admin.

    Raises:
        - 400 Bad Request: Missing fields, invalid subdomain or password
        - 409 Conflict: Subdomain already exists
    """
    command = RegisterTenantCommand(
        tenant_name=request.tenant_name,
        subdomain=request.subdomain,
        admin_email=request.admin_email,
        admin_password=request.admin_password,
        admin_full_name=request.admin_full_name,
    )

    result = await RegisterTenantUseCase(uow).execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Give tenant_subdomain or tenant_id for a tenant login; omit both for the
    super admin.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    tenant_subdomain: Optional[str] = None
    tenant_id: Optional[str] = None


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Authenticate and return a JWT.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Tenant not active or user inactive
        - 404 Not Found: Tenant not found
    """
    result = await LoginUseCase(uow).execute(LoginCommand(**request.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def me(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current user and tenant"""
    result = await LoadContextUseCase(uow).execute(principal)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(principal: Principal = Depends(get_current_principal)):
    """
    Logout acknowledgement.

    Tokens are stateless: the client discards its token.
    """
    return {"status": "logged_out"}
