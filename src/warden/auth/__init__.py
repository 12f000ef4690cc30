"""RBAC baseline."""

from warden.auth.rbac import PERMISSIONS, check_permission, has_permission, role_permissions

__all__ = ["PERMISSIONS", "check_permission", "has_permission", "role_permissions"]
