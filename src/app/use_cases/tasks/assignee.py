"""Assignee resolution shared by task creation and full update"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import validation_error
from src.app.services.unit_of_work import UnitOfWork


async def resolve_assignee(
    uow: UnitOfWork, assigned_to: Optional[str], tenant_id: UUID
) -> Result[Optional[UUID]]:
    """
    Parse assigned_to and check the user belongs to tenant_id.

    Returns:
        Result with the user id (None when unassigned), or VALIDATION_ERROR
    """
    if not assigned_to:
        return Return.ok(None)

    try:
        user_id = UUID(str(assigned_to))
    except ValueError:
        return Return.err(validation_error("Invalid user ID format"))

    user = await uow.users.get_in_tenant(user_id, tenant_id)
    if user is None:
        return Return.err(validation_error("Assigned user not found in this tenant"))
    return Return.ok(user.id)
