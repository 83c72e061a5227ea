"""
Delete User Use Case

Removes a user after unassigning every task that points to it.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, UserResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from src.domain.principal import Principal
from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user.

    Business Rules:
    - Self-deletion is denied for every role
    - Only an admin of the user's tenant may delete
    - Tasks assigned to the user are unassigned, then the row is removed,
      in the same transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, user_id: UUID
    ) -> Result[DeleteUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or not principal.can_see_tenant(user.tenant_id):
                return Return.err(not_found("User"))

            denied = ensure_allowed(principal, Action.delete_user, UserResource.of(user))
            if denied:
                return Return.err(denied)

            unassigned = await self.uow.tasks.unassign_user(user.id)
            await self.uow.users.delete(user)

            await record_audit(
                self.uow,
                AuditAction.delete_user,
                tenant_id=user.tenant_id,
                user_id=principal.user_id,
                entity_type="user",
                entity_id=user.id,
                metadata={"email": user.email, "tasks_unassigned": unassigned},
            )
            await self.uow.commit()

            logger.info(
                "User %s deleted by %s (%d tasks unassigned)",
                user.id,
                principal.user_id,
                unassigned,
            )

            return Return.ok(
                DeleteUserResponse(status="deleted", tasks_unassigned=unassigned)
            )
