"""
Authorization Engine

Single decision table for every tenant-scoped action. ``authorize`` is a pure
function of (principal, action, resource snapshot, intended changes): no
clock, no randomness, no store access. Use cases fetch the resource snapshot
inside their unit of work and call ``ensure_allowed`` before any write.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from libs.result import Error
from src.app.errors import access_denied
from src.domain.entities import Project, Task, Tenant, User, UserRole
from src.domain.principal import Principal

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Every action the engine can decide on"""

    view_tenant = "ViewTenant"
    update_tenant = "UpdateTenant"
    list_tenants_global = "ListTenantsGlobal"
    add_user_to_tenant = "AddUserToTenant"
    list_tenant_users = "ListTenantUsers"
    view_audit_log = "ViewAuditLog"
    update_user = "UpdateUser"
    delete_user = "DeleteUser"
    list_projects = "ListProjects"
    view_project = "ViewProject"
    create_project = "CreateProject"
    update_project = "UpdateProject"
    delete_project = "DeleteProject"
    create_task = "CreateTask"
    list_tasks = "ListTasks"
    update_task_status = "UpdateTaskStatus"
    update_task_full = "UpdateTaskFull"
    delete_task = "DeleteTask"


class DenyReason(str, Enum):
    """Why a decision denied; logged, never sent to the client"""

    wrong_tenant = "WrongTenant"
    insufficient_role = "InsufficientRole"
    self_action_forbidden = "SelfActionForbidden"


class Decision(BaseModel):
    """Allow, or Deny with a reason"""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


# ============================================================================
# Resource snapshots
# ============================================================================


class TenantResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID

    @classmethod
    def of(cls, tenant: Tenant) -> "TenantResource":
        return cls(id=tenant.id)


class UserResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    tenant_id: Optional[UUID] = None
    role: UserRole
    is_active: bool = True

    @classmethod
    def of(cls, user: User) -> "UserResource":
        return cls(
            id=user.id,
            tenant_id=user.tenant_id,
            role=user.role,
            is_active=user.is_active,
        )


class ProjectResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    tenant_id: UUID
    created_by: UUID

    @classmethod
    def of(cls, project: Project) -> "ProjectResource":
        return cls(
            id=project.id, tenant_id=project.tenant_id, created_by=project.created_by
        )


class TaskResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    tenant_id: UUID
    assigned_to: Optional[UUID] = None

    @classmethod
    def of(cls, task: Task) -> "TaskResource":
        return cls(id=task.id, tenant_id=task.tenant_id, assigned_to=task.assigned_to)


Resource = Union[TenantResource, UserResource, ProjectResource, TaskResource]

ADMIN_ROLES = frozenset({UserRole.tenant_admin, UserRole.super_admin})

# Tenant fields only a super admin may change
RESTRICTED_TENANT_FIELDS = frozenset(
    {"status", "subscription_plan", "max_users", "max_projects"}
)

# User fields only an admin of the user's tenant may change
ADMIN_USER_FIELDS = frozenset({"role", "is_active"})

ALLOW = Decision.allow()


def _in_tenant(principal: Principal, tenant_id: Optional[UUID]) -> bool:
    return principal.tenant_id is not None and principal.tenant_id == tenant_id


def _expect(resource: Optional[Resource], kind: type, action: "Action"):
    if not isinstance(resource, kind):
        raise TypeError(
            f"{action.value} requires a {kind.__name__}, got {type(resource).__name__}"
        )
    return resource


# ============================================================================
# Rules (one per action)
# ============================================================================


def _list_tenants_global(principal, resource, changes) -> Decision:
    if principal.is_super_admin:
        return ALLOW
    return Decision.deny(DenyReason.insufficient_role)


def _view_tenant(principal, resource, changes) -> Decision:
    tenant = _expect(resource, TenantResource, Action.view_tenant)
    if principal.is_super_admin or _in_tenant(principal, tenant.id):
        return ALLOW
    return Decision.deny(DenyReason.wrong_tenant)


def _update_tenant(principal, resource, changes) -> Decision:
    tenant = _expect(resource, TenantResource, Action.update_tenant)
    if principal.is_super_admin:
        return ALLOW
    if not _in_tenant(principal, tenant.id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role != UserRole.tenant_admin:
        return Decision.deny(DenyReason.insufficient_role)
    # Hard deny, not a silent ignore of the restricted fields
    if RESTRICTED_TENANT_FIELDS.intersection(changes):
        return Decision.deny(DenyReason.insufficient_role)
    return ALLOW


def _add_user_to_tenant(principal, resource, changes) -> Decision:
    tenant = _expect(resource, TenantResource, Action.add_user_to_tenant)
    requested_role = changes.get("role") or UserRole.user
    if requested_role != UserRole.user and principal.role not in ADMIN_ROLES:
        return Decision.deny(DenyReason.insufficient_role)
    if principal.is_super_admin:
        return ALLOW
    if not _in_tenant(principal, tenant.id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role != UserRole.tenant_admin:
        return Decision.deny(DenyReason.insufficient_role)
    return ALLOW


def _list_tenant_users(principal, resource, changes) -> Decision:
    tenant = _expect(resource, TenantResource, Action.list_tenant_users)
    if principal.is_super_admin or _in_tenant(principal, tenant.id):
        return ALLOW
    return Decision.deny(DenyReason.wrong_tenant)


def _view_audit_log(principal, resource, changes) -> Decision:
    tenant = _expect(resource, TenantResource, Action.view_audit_log)
    if principal.is_super_admin:
        return ALLOW
    if not _in_tenant(principal, tenant.id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role != UserRole.tenant_admin:
        return Decision.deny(DenyReason.insufficient_role)
    return ALLOW


def _update_user(principal, resource, changes) -> Decision:
    target = _expect(resource, UserResource, Action.update_user)
    is_self = principal.user_id == target.id

    # Self role change and self deactivation are denied for every role
    if is_self:
        if "role" in changes and changes["role"] != target.role:
            return Decision.deny(DenyReason.self_action_forbidden)
        if "is_active" in changes and changes["is_active"] is False:
            return Decision.deny(DenyReason.self_action_forbidden)

    same_tenant = principal.tenant_id == target.tenant_id
    is_admin_of_target = same_tenant and principal.role in ADMIN_ROLES

    if is_admin_of_target:
        return ALLOW
    if is_self and not ADMIN_USER_FIELDS.intersection(changes):
        return ALLOW
    if not same_tenant:
        return Decision.deny(DenyReason.wrong_tenant)
    return Decision.deny(DenyReason.insufficient_role)


def _delete_user(principal, resource, changes) -> Decision:
    target = _expect(resource, UserResource, Action.delete_user)
    if principal.user_id == target.id:
        return Decision.deny(DenyReason.self_action_forbidden)
    if principal.tenant_id != target.tenant_id:
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role not in ADMIN_ROLES:
        return Decision.deny(DenyReason.insufficient_role)
    return ALLOW


def _list_projects(principal, resource, changes) -> Decision:
    if principal.is_super_admin or principal.tenant_id is not None:
        return ALLOW
    return Decision.deny(DenyReason.wrong_tenant)


def _view_project(principal, resource, changes) -> Decision:
    project = _expect(resource, ProjectResource, Action.view_project)
    if principal.is_super_admin or _in_tenant(principal, project.tenant_id):
        return ALLOW
    return Decision.deny(DenyReason.wrong_tenant)


def _create_project(principal, resource, changes) -> Decision:
    if principal.role != UserRole.tenant_admin:
        return Decision.deny(DenyReason.insufficient_role)
    if principal.tenant_id is None:
        return Decision.deny(DenyReason.wrong_tenant)
    return ALLOW


def _update_project(principal, resource, changes) -> Decision:
    project = _expect(resource, ProjectResource, Action.update_project)
    if not _in_tenant(principal, project.tenant_id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.user_id == project.created_by or principal.role in ADMIN_ROLES:
        return ALLOW
    return Decision.deny(DenyReason.insufficient_role)


def _delete_project(principal, resource, changes) -> Decision:
    project = _expect(resource, ProjectResource, Action.delete_project)
    if not _in_tenant(principal, project.tenant_id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role != UserRole.tenant_admin:
        return Decision.deny(DenyReason.insufficient_role)
    return ALLOW


def _create_task(principal, resource, changes) -> Decision:
    project = _expect(resource, ProjectResource, Action.create_task)
    if _in_tenant(principal, project.tenant_id):
        return ALLOW
    return Decision.deny(DenyReason.wrong_tenant)


def _list_tasks(principal, resource, changes) -> Decision:
    project = _expect(resource, ProjectResource, Action.list_tasks)
    if principal.is_super_admin or _in_tenant(principal, project.tenant_id):
        return ALLOW
    return Decision.deny(DenyReason.wrong_tenant)


def _update_task(principal, resource, changes) -> Decision:
    task = _expect(resource, TaskResource, Action.update_task_full)
    if principal.is_super_admin:
        return ALLOW
    if not _in_tenant(principal, task.tenant_id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role == UserRole.tenant_admin or principal.user_id == task.assigned_to:
        return ALLOW
    return Decision.deny(DenyReason.insufficient_role)


def _delete_task(principal, resource, changes) -> Decision:
    task = _expect(resource, TaskResource, Action.delete_task)
    if not _in_tenant(principal, task.tenant_id):
        return Decision.deny(DenyReason.wrong_tenant)
    if principal.role != UserRole.tenant_admin:
        return Decision.deny(DenyReason.insufficient_role)
    return ALLOW


Rule = Callable[[Principal, Optional[Resource], Mapping[str, Any]], Decision]

_RULES: Dict[Action, Rule] = {
    Action.list_tenants_global: _list_tenants_global,
    Action.view_tenant: _view_tenant,
    Action.update_tenant: _update_tenant,
    Action.add_user_to_tenant: _add_user_to_tenant,
    Action.list_tenant_users: _list_tenant_users,
    Action.view_audit_log: _view_audit_log,
    Action.update_user: _update_user,
    Action.delete_user: _delete_user,
    Action.list_projects: _list_projects,
    Action.view_project: _view_project,
    Action.create_project: _create_project,
    Action.update_project: _update_project,
    Action.delete_project: _delete_project,
    Action.create_task: _create_task,
    Action.list_tasks: _list_tasks,
    Action.update_task_status: _update_task,
    Action.update_task_full: _update_task,
    Action.delete_task: _delete_task,
}

_missing_rules = set(Action) - set(_RULES)
if _missing_rules:
    raise RuntimeError(
        "No authorization rule for: "
        + ", ".join(sorted(action.value for action in _missing_rules))
    )


def authorize(
    principal: Principal,
    action: Action,
    resource: Optional[Resource] = None,
    changes: Optional[Mapping[str, Any]] = None,
) -> Decision:
    """
    Decide whether principal may perform action on resource.

    Args:
        principal: Caller identity
        action: Action being attempted
        resource: Snapshot of the target (None for collection-level actions)
        changes: Fields the caller intends to set (UpdateTenant,
            AddUserToTenant, UpdateUser)

    Returns:
        Decision.allow() or Decision.deny(reason)
    """
    return _RULES[action](principal, resource, changes or {})


def ensure_allowed(
    principal: Principal,
    action: Action,
    resource: Optional[Resource] = None,
    changes: Optional[Mapping[str, Any]] = None,
) -> Optional[Error]:
    """Return an ACCESS_DENIED error when the decision denies, else None"""
    decision = authorize(principal, action, resource, changes)
    if decision.allowed:
        return None

    logger.info(
        "Access denied: user=%s role=%s action=%s resource=%s reason=%s",
        principal.user_id,
        principal.role.value,
        action.value,
        getattr(resource, "id", None),
        decision.reason.value,
    )
    return access_denied()
