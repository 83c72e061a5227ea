"""
Get Project Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found
from src.app.services.authorization import Action, ProjectResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import Principal
from .dtos import ProjectResponse, ProjectSummaryResponse


class GetProjectUseCase:
    """Use case for reading one project with its task count"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, project_id: UUID
    ) -> Result[ProjectSummaryResponse]:
        async with self.uow:
            project = await self.uow.projects.get_by_id(project_id)
            if project is None or not principal.can_see_tenant(project.tenant_id):
                return Return.err(not_found("Project"))

            denied = ensure_allowed(
                principal, Action.view_project, ProjectResource.of(project)
            )
            if denied:
                return Return.err(denied)

            counts = await self.uow.tasks.count_by_projects([project.id])
            tenant = await self.uow.tenants.get_by_id(project.tenant_id)

            return Return.ok(
                ProjectSummaryResponse(
                    **ProjectResponse.from_entity(project).model_dump(),
                    task_count=counts.get(project.id, 0),
                    tenant_name=tenant.name if tenant else None,
                    tenant_subdomain=tenant.subdomain if tenant else None,
                )
            )
