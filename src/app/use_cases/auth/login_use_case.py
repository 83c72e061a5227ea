"""
Login Use Case

Authenticates a user and issues a JWT carrying user_id, tenant_id and role.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import (
    INVALID_CREDENTIALS,
    TENANT_INACTIVE,
    USER_INACTIVE,
    not_found,
    validation_error,
)
from src.app.services.audit import record_audit
from src.app.services.password import burn_password_check, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantResponse
from src.app.use_cases.users.dtos import UserResponse
from src.api.utils.jwt import generate_jwt, token_expires_in
from src.domain.entities import AuditAction, Tenant, TenantStatus, User
from .dtos import LoginCommand, LoginResponse

logger = logging.getLogger(__name__)

_BAD_CREDENTIALS = Error(INVALID_CREDENTIALS, "Invalid credentials")


class LoginUseCase:
    """
    Use case for login and JWT issuance.

    Business Rules:
    - Tenant given (subdomain or id): tenant must exist (NOT_FOUND) and be
      active (TENANT_INACTIVE); the user is looked up inside that tenant
    - No tenant given: only the tenant-less super admin can log in
    - Unknown user and wrong password answer the same INVALID_CREDENTIALS
    - Inactive user answers USER_INACTIVE
    - A LOGIN audit event is written on success
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with credentials and optional tenant

        Returns:
            Result with LoginResponse containing the token, or Error
        """
        if not command.email or not command.password:
            return Return.err(
                validation_error("Missing required fields: email and password")
            )

        email = command.email.strip().lower()

        async with self.uow:
            tenant: Optional[Tenant] = None
            if command.tenant_subdomain or command.tenant_id:
                tenant_result = await self._find_tenant(command)
                if tenant_result.is_err():
                    return tenant_result
                tenant = tenant_result.value

                if tenant.status != TenantStatus.active:
                    return Return.err(
                        Error(TENANT_INACTIVE, "This tenant is not active")
                    )

                user = await self.uow.users.get_by_tenant_and_email(tenant.id, email)
            else:
                user = await self.uow.users.get_super_admin_by_email(email)

            if user is None:
                # Keep the unknown-user path as slow as a real comparison
                burn_password_check(command.password)
                return Return.err(_BAD_CREDENTIALS)

            if not user.is_active:
                return Return.err(Error(USER_INACTIVE, "User account is inactive"))

            if not verify_password(command.password, user.password_hash):
                logger.info("Failed login for user %s", user.id)
                return Return.err(_BAD_CREDENTIALS)

            await record_audit(
                self.uow,
                AuditAction.login,
                tenant_id=user.tenant_id,
                user_id=user.id,
                entity_type="user",
                entity_id=user.id,
            )
            await self.uow.commit()

            token = generate_jwt(user.id, user.tenant_id, user.role.value)

            return Return.ok(self._build_response(user, tenant, token))

    async def _find_tenant(self, command: LoginCommand) -> Result[Tenant]:
        if command.tenant_subdomain:
            tenant = await self.uow.tenants.get_by_subdomain(
                command.tenant_subdomain.strip().lower()
            )
        else:
            try:
                tenant_id = UUID(command.tenant_id)
            except ValueError:
                return Return.err(not_found("Tenant"))
            tenant = await self.uow.tenants.get_by_id(tenant_id)

        if tenant is None:
            return Return.err(not_found("Tenant"))
        return Return.ok(tenant)

    @staticmethod
    def _build_response(
        user: User, tenant: Optional[Tenant], token: str
    ) -> LoginResponse:
        return LoginResponse(
            user=UserResponse.from_entity(user),
            tenant=TenantResponse.from_entity(tenant) if tenant else None,
            token=token,
            expires_in=token_expires_in(),
        )
