"""
Unit tests for RBAC permission system
"""

from hvacpro.core.dependencies import require_permission
from hvacpro.core.permissions import (
    Permission,
    get_permissions_for_role,
    has_permission,
)
from hvacpro.models import UserRole


def test_get_permissions_for_role():
    """Test permission retrieval for all roles"""
    # Admin has all permissions
    admin_perms = get_permissions_for_role("admin")
    assert admin_perms == set(Permission)

    # Contractors run their workspace but not the sales pipeline
    contractor_perms = get_permissions_for_role("contractor")
    assert Permission.WORKSPACE_EDIT in contractor_perms
    assert Permission.COMPANY_EDIT in contractor_perms
    assert Permission.PIPELINE_VIEW not in contractor_perms
    assert Permission.TENANT_PREVIEW not in contractor_perms

    # Employees cannot edit the company profile
    employee_perms = get_permissions_for_role("employee")
    assert Permission.WORKSPACE_VIEW in employee_perms
    assert Permission.COMPANY_EDIT not in employee_perms


def test_role_enum_accepted():
    assert get_permissions_for_role(UserRole.ADMIN) == get_permissions_for_role("admin")
    assert get_permissions_for_role(UserRole.EMPLOYEE) == get_permissions_for_role("employee")


def test_unknown_role_has_no_permissions():
    assert get_permissions_for_role("guest") == set()


def test_has_permission():
    """Test permission checking logic"""
    admin_perms = get_permissions_for_role("admin")
    assert has_permission(Permission.PIPELINE_EDIT, admin_perms)
    assert has_permission(Permission.USERS_MANAGE, admin_perms)

    contractor_perms = get_permissions_for_role("contractor")
    assert not has_permission(Permission.PIPELINE_EDIT, contractor_perms)
    assert not has_permission(Permission.USERS_MANAGE, contractor_perms)


def test_only_admin_can_preview_tenants():
    for role in UserRole:
        allowed = has_permission(Permission.TENANT_PREVIEW, get_permissions_for_role(role))
        assert allowed is (role == UserRole.ADMIN)


def test_require_permission_dependency():
    """Test permission requirement dependency factory"""
    checker = require_permission(Permission.PIPELINE_VIEW)
    assert callable(checker)

    assert require_permission(Permission.USERS_MANAGE) is not checker
