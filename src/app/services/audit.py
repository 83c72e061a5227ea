"""Audit trail writer; always called inside the caller's unit of work"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent


async def record_audit(
    uow: UnitOfWork,
    action: AuditAction,
    tenant_id: Optional[UUID],
    user_id: Optional[UUID],
    entity_type: Optional[str] = None,
    entity_id: Optional[UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> AuditEvent:
    event = AuditEvent(
        tenant_id=tenant_id,
        user_id=user_id,
        action=action.value,
        entity_type=entity_type,
        entity_id=entity_id,
        event_metadata=metadata,
    )
    return await uow.audit_events.create(event)
