"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditEventResponse, GetAuditEventsUseCase
from src.depends import get_current_principal, get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(tags=["Audit"])


class AuditEventsResponse(BaseModel):
    """GET /tenants/{tenant_id}/audit-events response payload"""

    events: List[AuditEventResponse]


@router.get(
    "/tenants/{tenant_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    tenant_id: UUID,
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get the newest audit events of a tenant.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Caller is not an admin of the tenant
        - 404 Not Found: Unknown tenant, or another tenant's id
    """
    result = await GetAuditEventsUseCase(uow).execute(principal, tenant_id, limit=limit)

    if result.is_err():
        raise_for_error(result.error)

    return AuditEventsResponse(events=result.value)
