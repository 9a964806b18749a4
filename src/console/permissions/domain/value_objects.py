"""Value objects for the permissions administration domain.

Raw tuples mirror the platform's policy store; enhanced rows are the
display-only joins produced by the projector. Nothing here is persisted
by the console.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from shared_kernel.authorization import (
    is_protected_subject,
    is_role_subject,
    is_superuser_subject,
)


class PolicyKind(StrEnum):
    """Derived classification of a policy tuple.

    Never stored: always recomputed from the subject.
    """

    ROLE = "role"
    USER = "user"
    SUPERUSER = "superuser"


@dataclass(frozen=True)
class PolicyTuple:
    """A ``(subject, domain, object, action)`` grant.

    ``subject`` is either a role code or a user id; ``domain`` is a tenant id.
    """

    subject: str
    domain: str
    object: str
    action: str

    @classmethod
    def from_row(cls, row: Sequence[str]) -> PolicyTuple:
        """Build from the store's ``[subject, domain, object, action]`` row.

        Raises:
            ValueError: If the row does not have four fields
        """
        if len(row) != 4:
            raise ValueError(f"Policy row must have 4 fields, got {len(row)}")
        subject, domain, obj, action = (str(value) for value in row)
        return cls(subject=subject, domain=domain, object=obj, action=action)

    @property
    def kind(self) -> PolicyKind:
        return classify_policy(self)


@dataclass(frozen=True)
class RoleAssignment:
    """A ``(user, role, domain)`` assignment."""

    user: str
    role: str
    domain: str

    @classmethod
    def from_row(cls, row: Sequence[str]) -> RoleAssignment:
        """Build from the store's ``[user, role, domain]`` grouping row.

        Raises:
            ValueError: If the row does not have three fields
        """
        if len(row) != 3:
            raise ValueError(f"Role row must have 3 fields, got {len(row)}")
        user, role, domain = (str(value) for value in row)
        return cls(user=user, role=role, domain=domain)


def classify_policy(policy: PolicyTuple) -> PolicyKind:
    """Classify a tuple by its subject.

    Example:
        >>> classify_policy(PolicyTuple("viewer", "t1", "project", "read"))
        <PolicyKind.ROLE: 'role'>
        >>> classify_policy(PolicyTuple("u-7", "t1", "project", "read"))
        <PolicyKind.USER: 'user'>
    """
    if is_superuser_subject(policy.subject):
        return PolicyKind.SUPERUSER
    if is_role_subject(policy.subject):
        return PolicyKind.ROLE
    return PolicyKind.USER


@dataclass(frozen=True)
class EnhancedPolicy:
    """A policy tuple joined with display names.

    Attributes:
        removable: False for protected subjects; such rows get no removal
            control
    """

    subject: str
    subject_name: str
    domain: str
    domain_name: str
    object: str
    object_name: str
    action: str
    action_name: str
    kind: PolicyKind

    @property
    def removable(self) -> bool:
        return not is_protected_subject(self.subject)

    def to_tuple(self) -> PolicyTuple:
        return PolicyTuple(
            subject=self.subject,
            domain=self.domain,
            object=self.object,
            action=self.action,
        )


@dataclass(frozen=True)
class EnhancedRole:
    """A role assignment joined with display names."""

    user: str
    user_name: str
    role: str
    role_name: str
    domain: str
    domain_name: str

    @property
    def removable(self) -> bool:
        return not is_protected_subject(self.role)

    def to_assignment(self) -> RoleAssignment:
        return RoleAssignment(user=self.user, role=self.role, domain=self.domain)


RowT = TypeVar("RowT", EnhancedPolicy, EnhancedRole)


@dataclass(frozen=True)
class TenantGroup(Generic[RowT]):
    """Rows belonging to one tenant, for tenant-sectioned display."""

    domain: str
    domain_name: str
    rows: tuple[RowT, ...]


@dataclass(frozen=True)
class UserPermissions:
    """Effective grants of one user, as reported by the platform."""

    user_id: str
    permissions: tuple[PolicyTuple, ...]
    roles: tuple[str, ...]


@dataclass(frozen=True)
class RolePolicyRequest:
    """Add/remove request for a role policy."""

    role: str
    tenant: str
    object: str
    action: str


@dataclass(frozen=True)
class UserPolicyRequest:
    """Add/remove request for a direct user policy."""

    user_id: str
    tenant: str
    object: str
    action: str


@dataclass(frozen=True)
class UserRoleRequest:
    """Add/remove request for a user-role assignment."""

    user_id: str
    role: str
    tenant: str


@dataclass(frozen=True)
class TenantMemberRoleRequest:
    """Request replacing a tenant member's role."""

    tenant_id: str
    user_id: str
    role: str


@dataclass(frozen=True)
class TenantMemberRequest:
    """Request removing a member from a tenant."""

    tenant_id: str
    user_id: str


@dataclass(frozen=True)
class VocabularyOption:
    """One picker entry: a code with its display name and label."""

    code: str
    name: str
    label: str


@dataclass(frozen=True)
class Vocabulary:
    """Everything a dialog needs to populate its pickers."""

    roles: tuple[VocabularyOption, ...]
    assignable_roles: tuple[VocabularyOption, ...]
    tenant_member_roles: tuple[VocabularyOption, ...]
    objects: tuple[VocabularyOption, ...]
    actions: tuple[VocabularyOption, ...]
