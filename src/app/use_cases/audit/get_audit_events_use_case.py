"""
Get Audit Events Use Case

Retrieves the newest audit events of a tenant.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.errors import not_found, validation_error
from src.app.services.authorization import Action, TenantResource, ensure_allowed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import Principal

MAX_AUDIT_EVENTS = 100
DEFAULT_AUDIT_EVENTS = 50


class AuditEventResponse(BaseModel):
    """One audit event, with the acting user's email when still known"""

    id: str
    action: str
    user_id: Optional[str]
    user_email: Optional[str]
    entity_type: Optional[str]
    entity_id: Optional[str]
    metadata: Dict[str, Any]
    created_at: datetime


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a tenant.

    Business Rules:
    - Tenant admin of that tenant, or super admin
    - Results ordered by newest first
    - limit between 1 and 100 (default 50)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Principal, tenant_id: UUID, limit: int = DEFAULT_AUDIT_EVENTS
    ) -> Result[List[AuditEventResponse]]:
        """
        Execute get audit events use case.

        Args:
            principal: Caller
            tenant_id: Tenant whose events are read
            limit: Maximum number of events to return

        Returns:
            Result with the events, or Error
        """
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None or not principal.can_see_tenant(tenant.id):
                return Return.err(not_found("Tenant"))

            denied = ensure_allowed(
                principal, Action.view_audit_log, TenantResource.of(tenant)
            )
            if denied:
                return Return.err(denied)

            if not 1 <= limit <= MAX_AUDIT_EVENTS:
                return Return.err(
                    validation_error(f"limit must be between 1 and {MAX_AUDIT_EVENTS}")
                )

            events = await self.uow.audit_events.list_recent_by_tenant(
                tenant.id, limit=limit
            )

            # Resolve each acting user's email once
            emails: Dict[UUID, Optional[str]] = {}
            for event in events:
                if event.user_id and event.user_id not in emails:
                    user = await self.uow.users.get_by_id(event.user_id)
                    emails[event.user_id] = user.email if user else None

            return Return.ok(
                [
                    AuditEventResponse(
                        id=str(event.id),
                        action=event.action,
                        user_id=str(event.user_id) if event.user_id else None,
                        user_email=emails.get(event.user_id),
                        entity_type=event.entity_type,
                        entity_id=str(event.entity_id) if event.entity_id else None,
                        metadata=event.event_metadata or {},
                        created_at=event.created_at,
                    )
                    for event in events
                ]
            )
