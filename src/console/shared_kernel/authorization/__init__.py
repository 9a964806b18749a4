"""Authorization vocabulary shared by the administration contexts.

This module provides the role enumeration, the protected-subject rule and
display-name helpers used by the catalog, permissions and upgrades contexts.
"""

from shared_kernel.authorization.types import (
    ASSIGNABLE_ROLES,
    AVAILABLE_ROLES,
    PROTECTED_ROLES,
    TENANT_MEMBER_ROLES,
    RoleCode,
    action_display_name,
    format_option_label,
    is_assignable_role,
    is_protected_subject,
    is_role_subject,
    is_superuser_subject,
    is_tenant_member_role,
    object_display_name,
    role_display_name,
    role_priority,
)

__all__ = [
    "ASSIGNABLE_ROLES",
    "AVAILABLE_ROLES",
    "PROTECTED_ROLES",
    "TENANT_MEMBER_ROLES",
    "RoleCode",
    "action_display_name",
    "format_option_label",
    "is_assignable_role",
    "is_protected_subject",
    "is_role_subject",
    "is_superuser_subject",
    "is_tenant_member_role",
    "object_display_name",
    "role_display_name",
    "role_priority",
]
