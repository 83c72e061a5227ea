"""
Delete Task Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, TaskResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction
from src.domain.principal import Principal
from .dtos import DeleteTaskResponse


class DeleteTaskUseCase:
    """Use case for deleting a task (tenant admin of the task's tenant only)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, task_id: UUID
    ) -> Result[DeleteTaskResponse]:
        async with self.uow:
            task = await self.uow.tasks.get_by_id(task_id)
            if task is None or not principal.can_see_tenant(task.tenant_id):
                return Return.err(not_found("Task"))

            denied = ensure_allowed(principal, Action.delete_task, TaskResource.of(task))
            if denied:
                return Return.err(denied)

            await self.uow.tasks.delete(task)

            await record_audit(
                self.uow,
                AuditAction.delete_task,
                tenant_id=task.tenant_id,
                user_id=principal.user_id,
                entity_type="task",
                entity_id=task.id,
                metadata={"title": task.title, "project_id": str(task.project_id)},
            )
            await self.uow.commit()

            return Return.ok(DeleteTaskResponse(status="deleted"))
