"""Authorization vocabulary for the administration console.

Defines the closed role enumeration, the protected-subject rule and the
display names used across bounded contexts. Policy kind (role policy vs
direct user policy) is always derived from these tables, never stored.
"""

from enum import StrEnum


class RoleCode(StrEnum):
    """Role codes known to the platform.

    Each value corresponds to a role subject in the platform's policy store.
    """

    ADMIN = "admin"
    OWNER = "owner"
    USER = "user"
    VIEWER = "viewer"
    PM = "pm"
    DEVELOPER = "developer"
    TESTER = "tester"


ROLE_DISPLAY_NAMES: dict[str, str] = {
    RoleCode.ADMIN: "Administrator",
    RoleCode.OWNER: "Owner",
    RoleCode.USER: "User",
    RoleCode.VIEWER: "Viewer",
    RoleCode.PM: "Project Manager",
    RoleCode.DEVELOPER: "Developer",
    RoleCode.TESTER: "Tester",
}

OBJECT_DISPLAY_NAMES: dict[str, str] = {
    "project": "Project",
    "package": "Package",
    "release": "Release",
    "user": "User",
    "file": "File",
    "tenant": "Tenant",
    "dashboard": "Dashboard",
    "upgrade": "Upgrade",
    "sidebar": "Sidebar",
}

ACTION_DISPLAY_NAMES: dict[str, str] = {
    "read": "Read",
    "write": "Write",
    "delete": "Delete",
    "create": "Create",
    "update": "Update",
    "list": "List",
    "share": "Share",
    "upload": "Upload",
    "download": "Download",
    "access": "Access",
}

# Superuser sentinel: implicitly all-access, never an editable row.
SUPERUSER_ROLE = RoleCode.ADMIN

PROTECTED_ROLES: frozenset[str] = frozenset({RoleCode.ADMIN, RoleCode.OWNER})

AVAILABLE_ROLES: tuple[str, ...] = tuple(str(role) for role in RoleCode)

ASSIGNABLE_ROLES: tuple[str, ...] = tuple(
    role for role in AVAILABLE_ROLES if role != SUPERUSER_ROLE
)

# Roles offered when adding a member from a tenant's user list.
TENANT_MEMBER_ROLES: tuple[str, ...] = tuple(
    role for role in ASSIGNABLE_ROLES if role not in PROTECTED_ROLES
)

# Ordering used when listing role assignments: protected rows first.
ROLE_PRIORITY: dict[str, int] = {
    RoleCode.ADMIN: 0,
    RoleCode.OWNER: 1,
    RoleCode.USER: 2,
    RoleCode.VIEWER: 3,
}
UNRANKED_ROLE_PRIORITY = 999


def is_superuser_subject(subject: str) -> bool:
    """Return True if the subject is the superuser sentinel."""
    return subject == SUPERUSER_ROLE


def is_protected_subject(subject: str) -> bool:
    """Return True if rows for this subject must never offer mutation.

    This is the single place deciding whether an ``admin``/``owner`` row
    may be removed or edited through the console.

    Args:
        subject: Role code or user id

    Returns:
        True for protected role codes
    """
    return subject in PROTECTED_ROLES


def is_role_subject(subject: str) -> bool:
    """Return True if a policy subject is an assignable role code.

    Example:
        >>> is_role_subject("viewer")
        True
        >>> is_role_subject("admin")
        False
        >>> is_role_subject("u-42")
        False
    """
    return subject in ASSIGNABLE_ROLES


def is_assignable_role(role: str) -> bool:
    """Return True if the role may be granted through the console."""
    return role in ASSIGNABLE_ROLES


def is_tenant_member_role(role: str) -> bool:
    """Return True if the role may be given from a tenant's user list."""
    return role in TENANT_MEMBER_ROLES


def role_priority(role: str) -> int:
    """Sort key placing high-privilege roles first."""
    return ROLE_PRIORITY.get(role, UNRANKED_ROLE_PRIORITY)


def role_display_name(role: str) -> str:
    """Get display name for a role, falling back to the code."""
    return ROLE_DISPLAY_NAMES.get(role, role)


def object_display_name(obj: str) -> str:
    """Get display name for an object/resource, falling back to the code."""
    return OBJECT_DISPLAY_NAMES.get(obj, obj)


def action_display_name(action: str) -> str:
    """Get display name for an action, falling back to the code."""
    return ACTION_DISPLAY_NAMES.get(action, action)


def format_option_label(display_name: str, code: str) -> str:
    """Format a picker label as ``Display (code)``.

    Example:
        >>> format_option_label("Viewer", "viewer")
        'Viewer (viewer)'
    """
    return f"{display_name} ({code})"
