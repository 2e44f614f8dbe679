"""
RBAC (Role-Based Access Control) permission system
"""

from enum import Enum
from typing import Set


class Permission(str, Enum):
    """Permission definitions"""
    # Administration
    USERS_MANAGE = "users:manage"
    CONTRACTORS_MANAGE = "contractors:manage"

    # Atlas sales pipeline
    PIPELINE_VIEW = "pipeline:view"
    PIPELINE_EDIT = "pipeline:edit"

    # Read-only tenant dashboard preview
    TENANT_PREVIEW = "tenant:preview"

    # Own tenant workspace
    WORKSPACE_VIEW = "workspace:view"
    WORKSPACE_EDIT = "workspace:edit"
    COMPANY_EDIT = "company:edit"


# Role permission mapping
ROLE_PERMISSIONS = {
    "admin": {
        # Admins have all permissions
        Permission.USERS_MANAGE,
        Permission.CONTRACTORS_MANAGE,
        Permission.PIPELINE_VIEW,
        Permission.PIPELINE_EDIT,
        Permission.TENANT_PREVIEW,
        Permission.WORKSPACE_VIEW,
        Permission.WORKSPACE_EDIT,
        Permission.COMPANY_EDIT,
    },
    "contractor": {
        # Tenant owners run their own workspace and company profile
        Permission.WORKSPACE_VIEW,
        Permission.WORKSPACE_EDIT,
        Permission.COMPANY_EDIT,
    },
    "employee": {
        Permission.WORKSPACE_VIEW,
        Permission.WORKSPACE_EDIT,
    },
}


def get_permissions_for_role(role: str) -> Set[Permission]:
    """Get permissions for a given role"""
    role = getattr(role, "value", role)
    return ROLE_PERMISSIONS.get(str(role).lower(), set())


def has_permission(required_permission: Permission, user_permissions: Set[Permission]) -> bool:
    """Check if user has required permission"""
    return required_permission in user_permissions
