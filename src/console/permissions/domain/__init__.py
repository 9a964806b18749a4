"""Permissions domain module.

Contains policy tuples, role assignments, their enhanced display forms and
the pure projection that builds them.
"""

from permissions.domain.projection import Projection, build_vocabulary, project
from permissions.domain.value_objects import (
    EnhancedPolicy,
    EnhancedRole,
    PolicyKind,
    PolicyTuple,
    RoleAssignment,
    RolePolicyRequest,
    TenantGroup,
    TenantMemberRequest,
    TenantMemberRoleRequest,
    UserPermissions,
    UserPolicyRequest,
    UserRoleRequest,
    Vocabulary,
    VocabularyOption,
    classify_policy,
)

__all__ = [
    "EnhancedPolicy",
    "EnhancedRole",
    "PolicyKind",
    "PolicyTuple",
    "Projection",
    "RoleAssignment",
    "RolePolicyRequest",
    "TenantGroup",
    "TenantMemberRequest",
    "TenantMemberRoleRequest",
    "UserPermissions",
    "UserPolicyRequest",
    "UserRoleRequest",
    "Vocabulary",
    "VocabularyOption",
    "build_vocabulary",
    "classify_policy",
    "project",
]
