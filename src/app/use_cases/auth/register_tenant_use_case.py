"""
Register Tenant Use Case

Self-service onboarding: creates a tenant on the free plan and its first
tenant admin in a single transaction.
"""

import logging

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.errors import conflict, validation_error
from src.app.services.audit import record_audit
from src.app.services.password import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank, is_valid_password, is_valid_subdomain
from src.app.use_cases.tenants.dtos import TenantResponse
from src.app.use_cases.users.dtos import UserResponse
from src.domain.entities import (
    AuditAction,
    SubscriptionPlan,
    Tenant,
    TenantStatus,
    User,
    UserRole,
    limits_for,
)
from .dtos import RegisterTenantCommand, RegisterTenantResponse

logger = logging.getLogger(__name__)


class RegisterTenantUseCase:
    """
    Use case for tenant self-registration.

    Business Rules:
    - Subdomain is lowercased, 3-63 chars of [a-z0-9-], no leading/trailing hyphen
    - Subdomain is globally unique (CONFLICT before any insert)
    - Tenant starts active on the free plan with the free plan limits
    - First user is a tenant_admin with a lowercased email
    - Tenant, admin and audit event commit together or not at all
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: RegisterTenantCommand
    ) -> Result[RegisterTenantResponse]:
        """
        Execute register tenant use case.

        Args:
            command: RegisterTenantCommand with tenant and admin details

        Returns:
            Result with RegisterTenantResponse, or VALIDATION_ERROR / CONFLICT
        """
        missing = [
            field
            for field in (
                "tenant_name",
                "subdomain",
                "admin_email",
                "admin_password",
                "admin_full_name",
            )
            if is_blank(getattr(command, field))
        ]
        if missing:
            return Return.err(
                validation_error(f"Missing required fields: {', '.join(missing)}")
            )

        subdomain = command.subdomain.strip().lower()
        if not is_valid_subdomain(subdomain):
            return Return.err(
                validation_error(
                    "Invalid subdomain format (lowercase letters, digits and "
                    "hyphens, 3-63 characters)"
                )
            )
        if not is_valid_password(command.admin_password):
            return Return.err(
                validation_error("Password must be at least 8 characters")
            )

        # Hash outside the transaction
        password_hash = hash_password(command.admin_password)

        async with self.uow:
            existing = await self.uow.tenants.get_by_subdomain(subdomain)
            if existing is not None:
                return Return.err(conflict("Subdomain already exists"))

            limits = limits_for(SubscriptionPlan.free)
            try:
                tenant = await self.uow.tenants.create(
                    Tenant(
                        name=command.tenant_name.strip(),
                        subdomain=subdomain,
                        status=TenantStatus.active,
                        subscription_plan=SubscriptionPlan.free,
                        max_users=limits["max_users"],
                        max_projects=limits["max_projects"],
                    )
                )
            except IntegrityError:
                # Lost a race on the unique subdomain index
                logger.info("Subdomain %s registered concurrently", subdomain)
                return Return.err(conflict("Subdomain already exists"))

            admin = await self.uow.users.create(
                User(
                    tenant_id=tenant.id,
                    email=command.admin_email.strip().lower(),
                    password_hash=password_hash,
                    full_name=command.admin_full_name.strip(),
                    role=UserRole.tenant_admin,
                    is_active=True,
                )
            )

            await record_audit(
                self.uow,
                AuditAction.register_tenant,
                tenant_id=tenant.id,
                user_id=admin.id,
                entity_type="tenant",
                entity_id=tenant.id,
                metadata={"subdomain": subdomain, "admin_email": admin.email},
            )

            await self.uow.commit()

            logger.info("Registered tenant %s (%s)", tenant.id, subdomain)

            return Return.ok(
                RegisterTenantResponse(
                    tenant=TenantResponse.from_entity(tenant),
                    admin_user=UserResponse.from_entity(admin),
                )
            )
