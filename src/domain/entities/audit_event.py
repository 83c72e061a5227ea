"""
AuditEvent Entity

Immutable log of tenant mutations and logins.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of mutations and logins.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written in the same transaction as the change it records
    - tenant_id nullable for platform-level events (super admin login)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[UUID] = Field(default=None)
    user_id: Optional[UUID] = Field(default=None)

    action: str = Field(max_length=100)  # AuditAction value, e.g. "CREATE_TASK"
    entity_type: Optional[str] = Field(default=None, max_length=50)
    entity_id: Optional[UUID] = Field(default=None)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
        Index("idx_audit_user_id", "user_id"),
    )
