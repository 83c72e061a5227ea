"""
Update Task Status Use Case
"""

from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import invalid_choice, not_found, validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, TaskResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, TaskStatus
from src.domain.principal import Principal
from .dtos import TaskResponse, UpdateTaskStatusCommand


class UpdateTaskStatusUseCase:
    """
    Use case for moving a task to another status.

    Business Rules:
    - Assignee, tenant admin of the task's tenant, or super admin
    - Any status may follow any other
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, task_id: UUID, command: UpdateTaskStatusCommand
    ) -> Result[TaskResponse]:
        async with self.uow:
            task = await self.uow.tasks.get_by_id(task_id)
            if task is None or not principal.can_see_tenant(task.tenant_id):
                return Return.err(not_found("Task"))

            denied = ensure_allowed(
                principal, Action.update_task_status, TaskResource.of(task)
            )
            if denied:
                return Return.err(denied)

            if not command.status:
                return Return.err(validation_error("Status is required"))
            try:
                new_status = TaskStatus(command.status)
            except ValueError:
                return Return.err(invalid_choice("status", TaskStatus))

            previous = task.status
            task.status = new_status
            task.updated_at = datetime.utcnow()
            task = await self.uow.tasks.update(task)

            await record_audit(
                self.uow,
                AuditAction.update_task,
                tenant_id=task.tenant_id,
                user_id=principal.user_id,
                entity_type="task",
                entity_id=task.id,
                metadata={"status": {"from": previous.value, "to": new_status.value}},
            )
            await self.uow.commit()

            return Return.ok(TaskResponse.from_entity(task))
