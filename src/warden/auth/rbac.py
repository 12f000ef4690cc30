"""Flat role -> permission list checks, kept as the RBAC baseline.

Permissions are ``"action:resource"`` strings. There is no way to express a
condition on the resource here; ownership checks such as
``delete:ownComments`` have to be enforced by the caller.
"""

from __future__ import annotations

from warden.models.subject import Role, Subject

_ROLE_PERMISSIONS: dict[Role, frozenset[str]] = {
    Role.ADMIN: frozenset(
        {"view:comments", "create:comments", "update:comments", "delete:comments"}
    ),
    Role.MODERATOR: frozenset({"view:comments", "create:comments", "delete:comments"}),
    Role.USER: frozenset({"view:comments", "create:comments", "delete:ownComments"}),
}

PERMISSIONS = frozenset().union(*_ROLE_PERMISSIONS.values())


def role_permissions(role: Role | str) -> frozenset[str]:
    """Return the permissions granted to a role, empty for unknown roles."""
    try:
        return _ROLE_PERMISSIONS.get(Role(role), frozenset())
    except ValueError:
        return frozenset()


def check_permission(role: Role | str, permission: str) -> bool:
    """Check if a single role holds a permission."""
    return permission in role_permissions(role)


def has_permission(subject: Subject, permission: str) -> bool:
    """Check if any of the subject's roles holds a permission."""
    return any(check_permission(role, permission) for role in subject.roles)
