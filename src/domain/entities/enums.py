"""
Taskhub Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """User role; super_admin is the only role without a tenant"""

    super_admin = "super_admin"
    tenant_admin = "tenant_admin"
    user = "user"


# Roles a tenant user can hold
TENANT_ROLES = (UserRole.tenant_admin, UserRole.user)


class TenantStatus(str, Enum):
    """Tenant status"""

    active = "active"
    suspended = "suspended"
    trial = "trial"


class SubscriptionPlan(str, Enum):
    """Tenant subscription plan"""

    free = "free"
    pro = "pro"
    enterprise = "enterprise"


class ProjectStatus(str, Enum):
    """Project status"""

    active = "active"
    archived = "archived"
    completed = "completed"


class TaskStatus(str, Enum):
    """Task status; any value is reachable from any other"""

    todo = "todo"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, Enum):
    """Task priority"""

    low = "low"
    medium = "medium"
    high = "high"


class AuditAction(str, Enum):
    """Actions recorded in the audit log"""

    register_tenant = "REGISTER_TENANT"
    update_tenant = "UPDATE_TENANT"
    create_user = "CREATE_USER"
    update_user = "UPDATE_USER"
    delete_user = "DELETE_USER"
    create_project = "CREATE_PROJECT"
    update_project = "UPDATE_PROJECT"
    delete_project = "DELETE_PROJECT"
    create_task = "CREATE_TASK"
    update_task = "UPDATE_TASK"
    delete_task = "DELETE_TASK"
    login = "LOGIN"
