"""Policy store protocol (port) for the permissions bounded context.

The policy store is owned by the platform. Adds are not idempotent at the
store: adding an existing tuple is rejected, never silently merged.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from permissions.domain.value_objects import (
    PolicyTuple,
    RoleAssignment,
    RolePolicyRequest,
    TenantMemberRequest,
    TenantMemberRoleRequest,
    UserPermissions,
    UserPolicyRequest,
    UserRoleRequest,
)


@runtime_checkable
class IPolicyStore(Protocol):
    """Typed CRUD over role policies, user policies and role assignments.

    All mutating methods raise the shared error taxonomy:
    ``ConflictError`` for duplicates, ``NotFoundError`` when removing
    something that no longer exists, ``NetworkFailureError`` on transport
    failures and ``PlatformError`` for any other rejection.
    """

    async def list_policies(self) -> list[PolicyTuple]:
        """List every policy tuple, role and user subjects alike."""
        ...

    async def list_role_assignments(self) -> list[RoleAssignment]:
        """List every user-role assignment."""
        ...

    async def get_user_permissions(self, user_id: str) -> UserPermissions:
        """Get the effective permissions and roles of one user.

        Raises:
            NotFoundError: If the user does not exist
        """
        ...

    async def add_role_policy(self, request: RolePolicyRequest) -> None:
        """Grant ``(role, tenant, object, action)``.

        Raises:
            ConflictError: If the tuple already exists
        """
        ...

    async def remove_role_policy(self, request: RolePolicyRequest) -> None:
        """Revoke ``(role, tenant, object, action)``.

        Raises:
            NotFoundError: If the tuple does not exist
        """
        ...

    async def add_user_policy(self, request: UserPolicyRequest) -> None:
        """Grant ``(user, tenant, object, action)``.

        Raises:
            ConflictError: If the tuple already exists
        """
        ...

    async def remove_user_policy(self, request: UserPolicyRequest) -> None:
        """Revoke ``(user, tenant, object, action)``.

        Raises:
            NotFoundError: If the tuple does not exist
        """
        ...

    async def add_user_role(self, request: UserRoleRequest) -> None:
        """Assign ``role`` to ``user`` in ``tenant``.

        Raises:
            ConflictError: If the assignment already exists
        """
        ...

    async def remove_user_role(self, request: UserRoleRequest) -> None:
        """Remove exactly the ``(user, role, tenant)`` assignment.

        Raises:
            NotFoundError: If the assignment does not exist
        """
        ...

    async def update_tenant_member_role(self, request: TenantMemberRoleRequest) -> None:
        """Replace the role a user holds in a tenant.

        Raises:
            NotFoundError: If the user is not a member of the tenant
        """
        ...

    async def remove_tenant_member(self, request: TenantMemberRequest) -> None:
        """Remove a user, with every role they hold, from a tenant.

        Raises:
            NotFoundError: If the user is not a member of the tenant
        """
        ...
