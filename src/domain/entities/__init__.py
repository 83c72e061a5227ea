"""
Taskhub Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    TENANT_ROLES,
    AuditAction,
    ProjectStatus,
    SubscriptionPlan,
    TaskPriority,
    TaskStatus,
    TenantStatus,
    UserRole,
)
from .plans import PLAN_LIMITS, limits_for

# Export all entities
from .tenant import Tenant
from .user import User
from .project import Project
from .task import Task
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "TENANT_ROLES",
    "AuditAction",
    "ProjectStatus",
    "SubscriptionPlan",
    "TaskPriority",
    "TaskStatus",
    "TenantStatus",
    "UserRole",
    # Plans
    "PLAN_LIMITS",
    "limits_for",
    # Entities
    "Tenant",
    "User",
    "Project",
    "Task",
    "AuditEvent",
]
