"""
Audit Use Cases

All audit-related business logic.
"""

from .get_audit_events_use_case import AuditEventResponse, GetAuditEventsUseCase

__all__ = [
    "AuditEventResponse",
    "GetAuditEventsUseCase",
]
