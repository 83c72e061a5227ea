"""
Update User Use Case

Changes a user's full name, role or active flag.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, UserResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank
from src.domain.entities import TENANT_ROLES, AuditAction, UserRole
from src.domain.principal import Principal
from .dtos import UpdateUserCommand, UserResponse

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Use case for updating a user.

    Business Rules:
    - Foreign-tenant users are NOT_FOUND for non super admins
    - Self may change full_name only
    - Self role change and self deactivation are denied for every role
    - role / is_active require an admin of the user's tenant
    - super_admin cannot be granted through this operation
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, user_id: UUID, command: UpdateUserCommand
    ) -> Result[UserResponse]:
        """
        Execute update user use case.

        Args:
            principal: Caller
            user_id: User to update
            command: Fields to change (only explicitly set fields count)

        Returns:
            Result with the updated UserResponse, or Error
        """
        changes = command.model_dump(exclude_unset=True)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or not principal.can_see_tenant(user.tenant_id):
                return Return.err(not_found("User"))

            # The decision compares roles as enum members
            if changes.get("role") is not None:
                try:
                    changes["role"] = UserRole(changes["role"])
                except ValueError:
                    return Return.err(invalid_choice("role", TENANT_ROLES))

            denied = ensure_allowed(
                principal, Action.update_user, UserResource.of(user), changes
            )
            if denied:
                return Return.err(denied)

            if not changes:
                return Return.err(validation_error("No fields to update"))

            if "full_name" in changes:
                if is_blank(changes["full_name"]):
                    return Return.err(validation_error("full_name cannot be empty"))
                user.full_name = changes["full_name"].strip()

            if "role" in changes and changes["role"] != user.role:
                if changes["role"] not in TENANT_ROLES:
                    return Return.err(invalid_choice("role", TENANT_ROLES))
                user.role = changes["role"]

            if "is_active" in changes:
                if changes["is_active"] is None:
                    return Return.err(validation_error("is_active must be a boolean"))
                user.is_active = changes["is_active"]

            user.updated_at = datetime.utcnow()
            user = await self.uow.users.update(user)

            await record_audit(
                self.uow,
                AuditAction.update_user,
                tenant_id=user.tenant_id,
                user_id=principal.user_id,
                entity_type="user",
                entity_id=user.id,
                metadata={
                    field: value.value if isinstance(value, UserRole) else value
                    for field, value in changes.items()
                },
            )
            await self.uow.commit()

            logger.info("User %s updated by %s", user.id, principal.user_id)

            return Return.ok(UserResponse.from_entity(user))
