"""Enhanced policy projection.

Joins raw policy tuples and role assignments against the Entity Catalog
and shapes them for display. Everything in this module is pure: the same
input always yields an equal output, and missing joins degrade to the
raw id instead of raising or dropping a row.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from catalog.domain.value_objects import EntityCatalog
from permissions.domain.value_objects import (
    EnhancedPolicy,
    EnhancedRole,
    PolicyKind,
    PolicyTuple,
    RoleAssignment,
    RowT,
    TenantGroup,
    Vocabulary,
    VocabularyOption,
)
from shared_kernel.authorization import (
    ASSIGNABLE_ROLES,
    AVAILABLE_ROLES,
    TENANT_MEMBER_ROLES,
    action_display_name,
    format_option_label,
    is_role_subject,
    object_display_name,
    role_display_name,
    role_priority,
)


@dataclass(frozen=True)
class Projection:
    """Display-ready view of the authorization graph.

    Attributes:
        role_policies: Tuples whose subject is an assignable role
        user_policies: Tuples whose subject is a user id
        role_assignments: All assignments, protected roles first
    """

    role_policies: tuple[EnhancedPolicy, ...]
    user_policies: tuple[EnhancedPolicy, ...]
    role_assignments: tuple[EnhancedRole, ...]

    @property
    def role_policies_by_tenant(self) -> tuple[TenantGroup[EnhancedPolicy], ...]:
        return group_by_domain(self.role_policies)

    @property
    def user_policies_by_tenant(self) -> tuple[TenantGroup[EnhancedPolicy], ...]:
        return group_by_domain(self.user_policies)

    @property
    def role_assignments_by_tenant(self) -> tuple[TenantGroup[EnhancedRole], ...]:
        return group_by_domain(self.role_assignments)

    def tenant_members(self, tenant_id: str) -> tuple[EnhancedRole, ...]:
        """Assignments within one tenant, protected roles first."""
        return tuple(row for row in self.role_assignments if row.domain == tenant_id)


def _tenant_label(domain: str, catalog: EntityCatalog) -> str:
    return catalog.tenant_name(domain) or domain


def subject_display_name(subject: str, catalog: EntityCatalog) -> str:
    """Resolve a subject through the role table or the user catalog."""
    if is_role_subject(subject):
        return role_display_name(subject)
    return catalog.user_name(subject) or subject


def enhance_policy(policy: PolicyTuple, catalog: EntityCatalog) -> EnhancedPolicy:
    """Join a raw tuple with display names."""
    return EnhancedPolicy(
        subject=policy.subject,
        subject_name=subject_display_name(policy.subject, catalog),
        domain=policy.domain,
        domain_name=_tenant_label(policy.domain, catalog),
        object=policy.object,
        object_name=object_display_name(policy.object),
        action=policy.action,
        action_name=action_display_name(policy.action),
        kind=policy.kind,
    )


def enhance_role(assignment: RoleAssignment, catalog: EntityCatalog) -> EnhancedRole:
    """Join a raw role assignment with display names."""
    return EnhancedRole(
        user=assignment.user,
        user_name=catalog.user_name(assignment.user) or assignment.user,
        role=assignment.role,
        role_name=role_display_name(assignment.role),
        domain=assignment.domain,
        domain_name=_tenant_label(assignment.domain, catalog),
    )


def partition_policies(
    policies: Iterable[EnhancedPolicy],
) -> tuple[tuple[EnhancedPolicy, ...], tuple[EnhancedPolicy, ...]]:
    """Split enhanced tuples into (role policies, user policies).

    Superuser tuples land in neither partition.
    """
    role_policies: list[EnhancedPolicy] = []
    user_policies: list[EnhancedPolicy] = []
    for policy in policies:
        if policy.kind is PolicyKind.ROLE:
            role_policies.append(policy)
        elif policy.kind is PolicyKind.USER:
            user_policies.append(policy)
    return tuple(role_policies), tuple(user_policies)


def group_by_domain(rows: Iterable[RowT]) -> tuple[TenantGroup[RowT], ...]:
    """Group rows by tenant, in order of each tenant's first occurrence."""
    grouped: dict[str, list[RowT]] = {}
    names: dict[str, str] = {}
    for row in rows:
        grouped.setdefault(row.domain, []).append(row)
        names.setdefault(row.domain, row.domain_name)
    return tuple(
        TenantGroup(domain=domain, domain_name=names[domain], rows=tuple(members))
        for domain, members in grouped.items()
    )


def order_role_assignments(
    assignments: Iterable[EnhancedRole],
) -> tuple[EnhancedRole, ...]:
    """Order assignments by role priority; ties keep fetch order."""
    return tuple(sorted(assignments, key=lambda row: role_priority(row.role)))


def project(
    raw_policies: Iterable[PolicyTuple],
    raw_roles: Iterable[RoleAssignment],
    catalog: EntityCatalog,
) -> Projection:
    """Build the display projection from raw store data.

    Args:
        raw_policies: Policy tuples as fetched from the store
        raw_roles: Role assignments as fetched from the store
        catalog: Entity snapshot to resolve display names

    Returns:
        Projection with partitioned policies and ordered assignments
    """
    role_policies, user_policies = partition_policies(
        enhance_policy(policy, catalog) for policy in raw_policies
    )
    role_assignments = order_role_assignments(
        enhance_role(assignment, catalog) for assignment in raw_roles
    )
    return Projection(
        role_policies=role_policies,
        user_policies=user_policies,
        role_assignments=role_assignments,
    )


def _options(
    codes: Iterable[str], display: Callable[[str], str]
) -> tuple[VocabularyOption, ...]:
    options = []
    for code in codes:
        name = display(code)
        options.append(
            VocabularyOption(code=code, name=name, label=format_option_label(name, code))
        )
    return tuple(options)


def build_vocabulary(catalog: EntityCatalog) -> Vocabulary:
    """Picker options for roles, objects and actions.

    Objects and actions come from the catalog, so the pickers only offer
    what the policy store knows about.
    """
    return Vocabulary(
        roles=_options(AVAILABLE_ROLES, role_display_name),
        assignable_roles=_options(ASSIGNABLE_ROLES, role_display_name),
        tenant_member_roles=_options(TENANT_MEMBER_ROLES, role_display_name),
        objects=_options(catalog.objects, object_display_name),
        actions=_options(catalog.actions, action_display_name),
    )
