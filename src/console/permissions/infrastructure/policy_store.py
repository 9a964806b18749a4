"""Platform-backed implementation of the policy store port.

Talks to the platform's casbin administration endpoints, and to the tenant
membership endpoints for member role changes and removals. Request bodies
use the platform's field names (``user_id``, ``role``, ``tenant``,
``object``, ``action``).
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from infrastructure.platform import PlatformClient
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
from permissions.ports.policy_store import IPolicyStore

POLICIES_PATH = "/casbin/policies"
ROLE_POLICIES_PATH = "/casbin/role-policies"
ROLES_PATH = "/casbin/roles"


class PlatformPolicyStore(IPolicyStore):
    """Policy store client over the platform REST API."""

    def __init__(self, client: PlatformClient):
        self._client = client

    async def list_policies(self) -> list[PolicyTuple]:
        data = await self._client.get(POLICIES_PATH)
        return [PolicyTuple.from_row(row) for row in _rows(data, "policies")]

    async def list_role_assignments(self) -> list[RoleAssignment]:
        data = await self._client.get(ROLES_PATH)
        return [RoleAssignment.from_row(row) for row in _rows(data, "roles")]

    async def get_user_permissions(self, user_id: str) -> UserPermissions:
        data = await self._client.get(f"/casbin/users/{user_id}/permissions")
        data = data if isinstance(data, dict) else {}
        return UserPermissions(
            user_id=str(data.get("user_id") or user_id),
            permissions=tuple(
                PolicyTuple.from_row(row) for row in data.get("permissions") or []
            ),
            roles=tuple(str(role) for role in data.get("roles") or []),
        )

    async def add_role_policy(self, request: RolePolicyRequest) -> None:
        await self._client.post(ROLE_POLICIES_PATH, json=asdict(request))

    async def remove_role_policy(self, request: RolePolicyRequest) -> None:
        await self._client.delete(ROLE_POLICIES_PATH, json=asdict(request))

    async def add_user_policy(self, request: UserPolicyRequest) -> None:
        await self._client.post(POLICIES_PATH, json=asdict(request))

    async def remove_user_policy(self, request: UserPolicyRequest) -> None:
        await self._client.delete(POLICIES_PATH, json=asdict(request))

    async def add_user_role(self, request: UserRoleRequest) -> None:
        await self._client.post(ROLES_PATH, json=asdict(request))

    async def remove_user_role(self, request: UserRoleRequest) -> None:
        await self._client.delete(ROLES_PATH, json=asdict(request))

    async def update_tenant_member_role(self, request: TenantMemberRoleRequest) -> None:
        await self._client.post(
            f"{_member_path(request)}/roles",
            json={"role": request.role, "is_active": True},
        )

    async def remove_tenant_member(self, request: TenantMemberRequest) -> None:
        await self._client.delete(_member_path(request))


def _member_path(request: TenantMemberRequest | TenantMemberRoleRequest) -> str:
    return f"/tenants/{request.tenant_id}/users/{request.user_id}"


def _rows(data: Any, key: str) -> list[list[str]]:
    if not isinstance(data, dict):
        return []
    return list(data.get(key) or [])
