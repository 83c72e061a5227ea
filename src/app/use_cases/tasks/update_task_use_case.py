"""
Update Task Use Case

Full update of a task's editable fields.
"""

from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, TaskResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank
from src.domain.entities import AuditAction, TaskPriority, TaskStatus
from src.domain.principal import Principal
from .assignee import resolve_assignee
from .dtos import TaskResponse, UpdateTaskCommand


class UpdateTaskUseCase:
    """
    Use case for a full task update.

    Business Rules:
    - Assignee, tenant admin of the task's tenant, or super admin
    - A new non-null assignee must belong to the task's tenant
    - Explicit null assigned_to unassigns
    - project_id and tenant_id never change
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, task_id: UUID, command: UpdateTaskCommand
    ) -> Result[TaskResponse]:
        """
        Execute update task use case.

        Args:
            principal: Caller
            task_id: Task to update
            command: Fields to change (only explicitly set fields count)

        Returns:
            Result with the updated TaskResponse, or Error
        """
        changes = command.model_dump(exclude_unset=True)

        async with self.uow:
            task = await self.uow.tasks.get_by_id(task_id)
            if task is None or not principal.can_see_tenant(task.tenant_id):
                return Return.err(not_found("Task"))

            denied = ensure_allowed(
                principal, Action.update_task_full, TaskResource.of(task)
            )
            if denied:
                return Return.err(denied)

            if not changes:
                return Return.err(validation_error("No fields to update"))

            applied: Dict[str, Any] = {}

            if "title" in changes:
                if is_blank(changes["title"]):
                    return Return.err(validation_error("Task title is required"))
                task.title = changes["title"].strip()
                applied["title"] = task.title

            if "description" in changes:
                task.description = changes["description"]
                applied["description"] = task.description

            if "status" in changes:
                try:
                    task.status = TaskStatus(changes["status"])
                except ValueError:
                    return Return.err(invalid_choice("status", TaskStatus))
                applied["status"] = task.status.value

            if "priority" in changes:
                try:
                    task.priority = TaskPriority(changes["priority"])
                except ValueError:
                    return Return.err(invalid_choice("priority", TaskPriority))
                applied["priority"] = task.priority.value

            if "assigned_to" in changes:
                assignee = await resolve_assignee(
                    self.uow, changes["assigned_to"], task.tenant_id
                )
                if assignee.is_err():
                    return assignee
                task.assigned_to = assignee.value
                applied["assigned_to"] = (
                    str(assignee.value) if assignee.value else None
                )

            if "due_date" in changes:
                task.due_date = changes["due_date"]
                applied["due_date"] = (
                    task.due_date.isoformat() if task.due_date else None
                )

            task.updated_at = datetime.utcnow()
            task = await self.uow.tasks.update(task)

            await record_audit(
                self.uow,
                AuditAction.update_task,
                tenant_id=task.tenant_id,
                user_id=principal.user_id,
                entity_type="task",
                entity_id=task.id,
                metadata=applied,
            )
            await self.uow.commit()

            return Return.ok(TaskResponse.from_entity(task))
