"""
Load Context Use Case

Loads the current user and its tenant for the principal of a request.
"""

from libs.result import Result, Return
from src.app.errors import not_found
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantResponse
from src.domain.principal import Principal
from .dtos import MeResponse, UserResponse


class LoadContextUseCase:
    """
    Use case for loading the current user context.

    Business Rules:
    - User must still exist (deleted after token issuance -> NOT_FOUND)
    - Super admin has no tenant
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(not_found("User"))

            tenant = None
            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)

            return Return.ok(
                MeResponse(
                    user=UserResponse.from_entity(user),
                    tenant=TenantResponse.from_entity(tenant) if tenant else None,
                )
            )
