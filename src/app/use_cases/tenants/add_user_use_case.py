"""
Add User Use Case

Creates a user inside a tenant, within the tenant's user limit.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.errors import conflict, invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, TenantResource, ensure_allowed
from src.app.services.password import hash_password
from src.app.services.tenant_limit_guard import BoundedResource, TenantLimitGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import UserResponse
from src.app.validators import is_blank, is_valid_password
from src.domain.entities import TENANT_ROLES, AuditAction, User, UserRole
from src.domain.principal import Principal
from .dtos import AddUserCommand

logger = logging.getLogger(__name__)


class AddUserUseCase:
    """
    Use case for adding a user to a tenant.

    Business Rules:
    - Super admin, or a tenant admin of that tenant
    - Role defaults to user; super_admin can never be assigned here
    - Email lowercased and unique within the tenant (CONFLICT)
    - Tenant user count stays within max_users (LIMIT_EXCEEDED),
      checked under the tenant row lock in the same transaction as the insert
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, tenant_id: UUID, command: AddUserCommand
    ) -> Result[UserResponse]:
        """
        Execute add user use case.

        Args:
            principal: Caller
            tenant_id: Tenant receiving the user
            command: AddUserCommand with the new user's details

        Returns:
            Result with the created UserResponse, or Error
        """
        missing = [
            field
            for field in ("email", "password", "full_name")
            if is_blank(getattr(command, field))
        ]
        if missing:
            return Return.err(
                validation_error(f"Missing required fields: {', '.join(missing)}")
            )

        role = UserRole.user
        if command.role is not None:
            try:
                role = UserRole(command.role)
            except ValueError:
                return Return.err(invalid_choice("role", TENANT_ROLES))

        if not is_valid_password(command.password):
            return Return.err(validation_error("Password must be at least 8 characters"))

        email = command.email.strip().lower()

        # Hash before the tenant row is locked
        password_hash = hash_password(command.password)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None or not principal.can_see_tenant(tenant.id):
                return Return.err(not_found("Tenant"))

            denied = ensure_allowed(
                principal,
                Action.add_user_to_tenant,
                TenantResource.of(tenant),
                {"role": role},
            )
            if denied:
                return Return.err(denied)

            if role not in TENANT_ROLES:
                return Return.err(invalid_choice("role", TENANT_ROLES))

            reserved = await TenantLimitGuard(self.uow).check_and_reserve(
                tenant.id, BoundedResource.users
            )
            if reserved.is_err():
                return reserved

            existing = await self.uow.users.get_by_tenant_and_email(tenant.id, email)
            if existing is not None:
                return Return.err(conflict("Email already exists in this tenant"))

            try:
                user = await self.uow.users.create(
                    User(
                        tenant_id=tenant.id,
                        email=email,
                        password_hash=password_hash,
                        full_name=command.full_name.strip(),
                        role=role,
                        is_active=True,
                    )
                )
            except IntegrityError:
                return Return.err(conflict("Email already exists in this tenant"))

            await record_audit(
                self.uow,
                AuditAction.create_user,
                tenant_id=tenant.id,
                user_id=principal.user_id,
                entity_type="user",
                entity_id=user.id,
                metadata={"email": email, "role": role.value},
            )
            await self.uow.commit()

            logger.info("User %s added to tenant %s", user.id, tenant.id)

            return Return.ok(UserResponse.from_entity(user))
