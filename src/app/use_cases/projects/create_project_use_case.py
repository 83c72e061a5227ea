"""
Create Project Use Case

Creates a project in the caller's tenant within the tenant's project limit.
"""

import logging

from libs.result import Result, Return
from src.app.errors import validation_error
from src.app.services.audit import record_audit
from src.app.services.authorization import Action, ensure_allowed
from src.app.services.tenant_limit_guard import BoundedResource, TenantLimitGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.validators import is_blank
from src.domain.entities import AuditAction, Project, ProjectStatus
from src.domain.principal import Principal
from .dtos import CreateProjectCommand, ProjectResponse

logger = logging.getLogger(__name__)


class CreateProjectUseCase:
    """
    Use case for creating a project.

    Business Rules:
    - Only a tenant admin, always in their own tenant
    - Project count stays within max_projects (LIMIT_EXCEEDED); the count is
      read under the tenant row lock in the same transaction as the insert
    - New projects are active and owned by the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, command: CreateProjectCommand
    ) -> Result[ProjectResponse]:
        """
        Execute create project use case.

        Args:
            principal: Caller (tenant and creator are taken from here)
            command: CreateProjectCommand with name and description

        Returns:
            Result with the created ProjectResponse, or Error
        """
        denied = ensure_allowed(principal, Action.create_project)
        if denied:
            return Return.err(denied)

        if is_blank(command.name):
            return Return.err(validation_error("Project name is required"))

        async with self.uow:
            reserved = await TenantLimitGuard(self.uow).check_and_reserve(
                principal.tenant_id, BoundedResource.projects
            )
            if reserved.is_err():
                return reserved

            project = await self.uow.projects.create(
                Project(
                    tenant_id=principal.tenant_id,
                    name=command.name.strip(),
                    description=command.description,
                    status=ProjectStatus.active,
                    created_by=principal.user_id,
                )
            )

            await record_audit(
                self.uow,
                AuditAction.create_project,
                tenant_id=project.tenant_id,
                user_id=principal.user_id,
                entity_type="project",
                entity_id=project.id,
                metadata={"name": project.name},
            )
            await self.uow.commit()

            logger.info("Project %s created in tenant %s", project.id, project.tenant_id)

            return Return.ok(ProjectResponse.from_entity(project))
