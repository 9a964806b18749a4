"""Policy administration service for the permissions bounded context.

Orchestrates the policy store, the Entity Catalog and the projector to
back the administration views: role permissions, user permissions, user
roles and tenant users.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from typing import TypeVar

from catalog.application import CatalogService
from permissions.application.observability import (
    DefaultPolicyAdministrationProbe,
    PolicyAdministrationProbe,
)
from permissions.application.validation import (
    validate_member_role,
    validate_removal,
    validate_role_policy,
    validate_user_policy,
    validate_user_role,
)
from permissions.domain import (
    EnhancedRole,
    Projection,
    RolePolicyRequest,
    TenantMemberRequest,
    TenantMemberRoleRequest,
    UserPermissions,
    UserPolicyRequest,
    UserRoleRequest,
    Vocabulary,
    build_vocabulary,
    project,
)
from permissions.ports.policy_store import IPolicyStore
from shared_kernel.authorization import is_protected_subject
from shared_kernel.exceptions import ConsoleError, NotFoundError, ProtectedSubjectError

RequestT = TypeVar(
    "RequestT",
    RolePolicyRequest,
    UserPolicyRequest,
    UserRoleRequest,
    TenantMemberRoleRequest,
    TenantMemberRequest,
)


class PolicyAdministrationService:
    """Application service for tenant-scoped RBAC administration.

    Every successful mutation invalidates the catalog snapshot and re-fetches
    the full tuple set; policy data is never patched optimistically.
    """

    def __init__(
        self,
        policy_store: IPolicyStore,
        catalog_service: CatalogService,
        probe: PolicyAdministrationProbe | None = None,
    ):
        """Initialize PolicyAdministrationService with dependencies.

        Args:
            policy_store: Port to the platform's policy store
            catalog_service: Request-scoped catalog cache used for display
                names and tenant validation
            probe: Optional domain probe for observability
        """
        self._store = policy_store
        self._catalog = catalog_service
        self._probe = probe or DefaultPolicyAdministrationProbe()

    async def load_overview(self) -> Projection:
        """Fetch tuples, assignments and the catalog, then project them.

        The three reads are independent and run concurrently.

        Returns:
            The projected snapshot
        """
        policies, roles, catalog = await asyncio.gather(
            self._store.list_policies(),
            self._store.list_role_assignments(),
            self._catalog.get_catalog(),
        )
        projection = project(policies, roles, catalog)
        self._probe.overview_loaded(
            role_policy_count=len(projection.role_policies),
            user_policy_count=len(projection.user_policies),
            role_assignment_count=len(projection.role_assignments),
        )
        return projection

    async def vocabulary(self) -> Vocabulary:
        """Return picker options for roles, objects and actions."""
        return build_vocabulary(await self._catalog.get_catalog())

    async def tenant_users(self, tenant_id: str) -> tuple[EnhancedRole, ...]:
        """Return the members of one tenant, protected roles first."""
        projection = await self.load_overview()
        return projection.tenant_members(tenant_id)

    async def get_user_permissions(self, user_id: str) -> UserPermissions:
        """Fetch one user's effective permissions and roles.

        Raises:
            NotFoundError: If the platform does not know the user
        """
        permissions = await self._store.get_user_permissions(user_id)
        self._probe.user_permissions_retrieved(
            user_id=user_id,
            permission_count=len(permissions.permissions),
        )
        return permissions

    async def add_role_policy(self, request: RolePolicyRequest) -> Projection:
        """Grant a role an action on an object within a tenant.

        Raises:
            PolicyValidationError: If the request fails a client-side check
            ConflictError: If the tuple already exists
        """
        validate_role_policy(request, await self._catalog.get_catalog())
        return await self._mutate(
            "add_role_policy", request, self._store.add_role_policy
        )

    async def remove_role_policy(self, request: RolePolicyRequest) -> Projection:
        """Revoke a role policy.

        Raises:
            ProtectedSubjectError: If the subject is a protected role
            NotFoundError: If the tuple no longer exists
        """
        validate_removal(request)
        self._refuse_protected("remove_role_policy", request.role)
        return await self._mutate(
            "remove_role_policy", request, self._store.remove_role_policy
        )

    async def add_user_policy(self, request: UserPolicyRequest) -> Projection:
        """Grant a user a direct action on an object within a tenant.

        Raises:
            PolicyValidationError: If the request fails a client-side check
            ConflictError: If the tuple already exists
        """
        validate_user_policy(request, await self._catalog.get_catalog())
        return await self._mutate(
            "add_user_policy", request, self._store.add_user_policy
        )

    async def remove_user_policy(self, request: UserPolicyRequest) -> Projection:
        """Revoke a direct user policy.

        Raises:
            ProtectedSubjectError: If the subject is a protected role code
            NotFoundError: If the tuple no longer exists
        """
        validate_removal(request)
        self._refuse_protected("remove_user_policy", request.user_id)
        return await self._mutate(
            "remove_user_policy", request, self._store.remove_user_policy
        )

    async def add_user_role(self, request: UserRoleRequest) -> Projection:
        """Assign a role to a user within a tenant.

        Raises:
            PolicyValidationError: If the request fails a client-side check
            ConflictError: If the assignment already exists
        """
        validate_user_role(request, await self._catalog.get_catalog())
        return await self._mutate("add_user_role", request, self._store.add_user_role)

    async def remove_user_role(self, request: UserRoleRequest) -> Projection:
        """Remove exactly the ``(user, role, tenant)`` assignment.

        Other roles of the same user, and the same role in other tenants,
        are untouched.

        Raises:
            ProtectedSubjectError: If the role is admin or owner
            NotFoundError: If the assignment no longer exists
        """
        validate_removal(request)
        self._refuse_protected("remove_user_role", request.role)
        return await self._mutate(
            "remove_user_role", request, self._store.remove_user_role
        )

    async def change_member_role(
        self, request: TenantMemberRoleRequest
    ) -> tuple[EnhancedRole, ...]:
        """Replace the role a member holds in a tenant.

        Members holding admin or owner are refused, and only tenant member
        roles may be given.

        Returns:
            The tenant's members after the change

        Raises:
            PolicyValidationError: If the request fails a client-side check
            ProtectedSubjectError: If the member holds a protected role
            NotFoundError: If the user is not a member of the tenant
        """
        validate_member_role(request, await self._catalog.get_catalog())
        await self._require_editable_member(
            "change_member_role", request.tenant_id, request.user_id
        )
        projection = await self._mutate(
            "change_member_role", request, self._store.update_tenant_member_role
        )
        return projection.tenant_members(request.tenant_id)

    async def remove_member(
        self, request: TenantMemberRequest
    ) -> tuple[EnhancedRole, ...]:
        """Remove a member, with every role they hold, from a tenant.

        Returns:
            The tenant's members after the removal

        Raises:
            ProtectedSubjectError: If the member holds a protected role
            NotFoundError: If the user is not a member of the tenant
        """
        validate_removal(request)
        await self._require_editable_member(
            "remove_member", request.tenant_id, request.user_id
        )
        projection = await self._mutate(
            "remove_member", request, self._store.remove_tenant_member
        )
        return projection.tenant_members(request.tenant_id)

    async def _require_editable_member(
        self, operation: str, tenant_id: str, user_id: str
    ) -> None:
        rows = [
            row
            for row in (await self.load_overview()).tenant_members(tenant_id)
            if row.user == user_id
        ]
        if not rows:
            raise NotFoundError(
                f"User {user_id} is not a member of tenant {tenant_id}"
            )
        for row in rows:
            self._refuse_protected(operation, row.role)

    def _refuse_protected(self, operation: str, subject: str) -> None:
        if is_protected_subject(subject):
            self._probe.protected_row_refused(operation=operation, subject=subject)
            raise ProtectedSubjectError(
                f"Rows for '{subject}' are protected and cannot be modified"
            )

    async def _mutate(
        self,
        operation: str,
        request: RequestT,
        call: Callable[[RequestT], Awaitable[None]],
    ) -> Projection:
        fields = asdict(request)
        try:
            await call(request)
        except ConsoleError as e:
            self._probe.mutation_rejected(
                operation=operation, reason=e.message, request=fields
            )
            raise

        self._probe.mutation_applied(operation=operation, request=fields)
        self._catalog.invalidate()
        return await self.load_overview()
