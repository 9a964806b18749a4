"""Pydantic models for permissions API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from permissions.domain import (
    EnhancedPolicy,
    EnhancedRole,
    PolicyTuple,
    Projection,
    RolePolicyRequest,
    TenantGroup,
    UserPermissions,
    UserPolicyRequest,
    UserRoleRequest,
    Vocabulary,
    VocabularyOption,
)


class RolePolicyBody(BaseModel):
    """Request model for adding or removing a role policy.

    Fields may arrive blank; presence is checked by the add dialog, or by
    the service for removals, so that every missing field is reported at
    once.
    """

    role: str = Field(default="", description="Role code (e.g. viewer)")
    tenant: str = Field(default="", description="Tenant ID (policy domain)")
    object: str = Field(default="", description="Object / resource code")
    action: str = Field(default="", description="Action code")

    def to_domain(self) -> RolePolicyRequest:
        return RolePolicyRequest(
            role=self.role.strip(),
            tenant=self.tenant.strip(),
            object=self.object.strip(),
            action=self.action.strip(),
        )


class UserPolicyBody(BaseModel):
    """Request model for adding or removing a direct user policy."""

    user_id: str = Field(default="", description="User ID")
    tenant: str = Field(default="", description="Tenant ID (policy domain)")
    object: str = Field(default="", description="Object / resource code")
    action: str = Field(default="", description="Action code")

    def to_domain(self) -> UserPolicyRequest:
        return UserPolicyRequest(
            user_id=self.user_id.strip(),
            tenant=self.tenant.strip(),
            object=self.object.strip(),
            action=self.action.strip(),
        )


class UserRoleBody(BaseModel):
    """Request model for assigning or removing a user role."""

    user_id: str = Field(default="", description="User ID")
    role: str = Field(default="", description="Role code")
    tenant: str = Field(default="", description="Tenant ID")

    def to_domain(self) -> UserRoleRequest:
        return UserRoleRequest(
            user_id=self.user_id.strip(),
            role=self.role.strip(),
            tenant=self.tenant.strip(),
        )


class TenantMemberRoleBody(BaseModel):
    """Request model for changing a tenant member's role."""

    role: str = Field(default="", description="Tenant member role code")


class PolicyRowResponse(BaseModel):
    """Response model for one enhanced policy row."""

    subject: str
    subject_name: str
    domain: str
    domain_name: str
    object: str
    object_name: str
    action: str
    action_name: str
    kind: str
    removable: bool

    @classmethod
    def from_domain(cls, row: EnhancedPolicy) -> PolicyRowResponse:
        return cls(
            subject=row.subject,
            subject_name=row.subject_name,
            domain=row.domain,
            domain_name=row.domain_name,
            object=row.object,
            object_name=row.object_name,
            action=row.action,
            action_name=row.action_name,
            kind=row.kind.value,
            removable=row.removable,
        )


class RoleRowResponse(BaseModel):
    """Response model for one enhanced role assignment row."""

    user: str
    user_name: str
    role: str
    role_name: str
    domain: str
    domain_name: str
    removable: bool

    @classmethod
    def from_domain(cls, row: EnhancedRole) -> RoleRowResponse:
        return cls(
            user=row.user,
            user_name=row.user_name,
            role=row.role,
            role_name=row.role_name,
            domain=row.domain,
            domain_name=row.domain_name,
            removable=row.removable,
        )


class PolicyGroupResponse(BaseModel):
    """Policies of one tenant."""

    domain: str
    domain_name: str
    rows: list[PolicyRowResponse]

    @classmethod
    def from_domain(cls, group: TenantGroup[EnhancedPolicy]) -> PolicyGroupResponse:
        return cls(
            domain=group.domain,
            domain_name=group.domain_name,
            rows=[PolicyRowResponse.from_domain(row) for row in group.rows],
        )


class RoleGroupResponse(BaseModel):
    """Role assignments of one tenant."""

    domain: str
    domain_name: str
    rows: list[RoleRowResponse]

    @classmethod
    def from_domain(cls, group: TenantGroup[EnhancedRole]) -> RoleGroupResponse:
        return cls(
            domain=group.domain,
            domain_name=group.domain_name,
            rows=[RoleRowResponse.from_domain(row) for row in group.rows],
        )


class OverviewResponse(BaseModel):
    """Response model for the projected permissions snapshot."""

    role_policies: list[PolicyGroupResponse] = Field(
        ..., description="Role policies grouped by tenant"
    )
    user_policies: list[PolicyGroupResponse] = Field(
        ..., description="Direct user policies grouped by tenant"
    )
    user_roles: list[RoleGroupResponse] = Field(
        ..., description="Role assignments grouped by tenant, by priority"
    )

    @classmethod
    def from_domain(cls, projection: Projection) -> OverviewResponse:
        return cls(
            role_policies=[
                PolicyGroupResponse.from_domain(group)
                for group in projection.role_policies_by_tenant
            ],
            user_policies=[
                PolicyGroupResponse.from_domain(group)
                for group in projection.user_policies_by_tenant
            ],
            user_roles=[
                RoleGroupResponse.from_domain(group)
                for group in projection.role_assignments_by_tenant
            ],
        )


class TenantUsersResponse(BaseModel):
    """Response model for a tenant's user list."""

    tenant_id: str
    members: list[RoleRowResponse]

    @classmethod
    def from_domain(
        cls, tenant_id: str, members: tuple[EnhancedRole, ...]
    ) -> TenantUsersResponse:
        return cls(
            tenant_id=tenant_id,
            members=[RoleRowResponse.from_domain(row) for row in members],
        )


class OptionResponse(BaseModel):
    """One picker option."""

    code: str
    name: str
    label: str

    @classmethod
    def from_domain(cls, option: VocabularyOption) -> OptionResponse:
        return cls(code=option.code, name=option.name, label=option.label)


class VocabularyResponse(BaseModel):
    """Response model for dialog picker options."""

    roles: list[OptionResponse]
    assignable_roles: list[OptionResponse]
    tenant_member_roles: list[OptionResponse]
    objects: list[OptionResponse]
    actions: list[OptionResponse]

    @classmethod
    def from_domain(cls, vocabulary: Vocabulary) -> VocabularyResponse:
        def convert(options: tuple[VocabularyOption, ...]) -> list[OptionResponse]:
            return [OptionResponse.from_domain(option) for option in options]

        return cls(
            roles=convert(vocabulary.roles),
            assignable_roles=convert(vocabulary.assignable_roles),
            tenant_member_roles=convert(vocabulary.tenant_member_roles),
            objects=convert(vocabulary.objects),
            actions=convert(vocabulary.actions),
        )


class UserPermissionsResponse(BaseModel):
    """Response model for one user's effective grants."""

    user_id: str
    permissions: list[list[str]] = Field(
        ..., description="[subject, domain, object, action] rows"
    )
    roles: list[str]

    @classmethod
    def from_domain(cls, permissions: UserPermissions) -> UserPermissionsResponse:
        return cls(
            user_id=permissions.user_id,
            permissions=[_row(policy) for policy in permissions.permissions],
            roles=list(permissions.roles),
        )


def _row(policy: PolicyTuple) -> list[str]:
    return [policy.subject, policy.domain, policy.object, policy.action]
