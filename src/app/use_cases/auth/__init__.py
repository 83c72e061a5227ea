"""Auth use cases"""

from .dtos import (
    LoginCommand,
    LoginResponse,
    RegisterTenantCommand,
    RegisterTenantResponse,
)
from .login_use_case import LoginUseCase
from .register_tenant_use_case import RegisterTenantUseCase

__all__ = [
    "LoginCommand",
    "LoginResponse",
    "LoginUseCase",
    "RegisterTenantCommand",
    "RegisterTenantResponse",
    "RegisterTenantUseCase",
]
