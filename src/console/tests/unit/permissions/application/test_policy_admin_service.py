"""Unit tests for PolicyAdministrationService."""

from unittest.mock import AsyncMock, MagicMock, Mock, create_autospec

import pytest

from catalog.application import CatalogService
from permissions.application.services import PolicyAdministrationService
from permissions.domain import (
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
from shared_kernel.exceptions import (
    ConflictError,
    NotFoundError,
    PolicyValidationError,
    ProtectedSubjectError,
)


@pytest.fixture
def mock_store():
    """Mock policy store holding a small authorization graph."""
    store = create_autospec(IPolicyStore, instance=True)
    store.list_policies = AsyncMock(
        return_value=[
            PolicyTuple("viewer", "t1", "project", "read"),
            PolicyTuple("u1", "t2", "release", "write"),
            PolicyTuple("admin", "t1", "*", "*"),
        ]
    )
    store.list_role_assignments = AsyncMock(
        return_value=[
            RoleAssignment("u1", "viewer", "t1"),
            RoleAssignment("u2", "owner", "t1"),
        ]
    )
    for name in (
        "add_role_policy",
        "remove_role_policy",
        "add_user_policy",
        "remove_user_policy",
        "add_user_role",
        "remove_user_role",
        "update_tenant_member_role",
        "remove_tenant_member",
    ):
        setattr(store, name, AsyncMock(return_value=None))
    return store


@pytest.fixture
def mock_catalog_service(catalog):
    service = Mock(spec=CatalogService)
    service.get_catalog = AsyncMock(return_value=catalog)
    return service


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def service(mock_store, mock_catalog_service, mock_probe):
    return PolicyAdministrationService(
        policy_store=mock_store,
        catalog_service=mock_catalog_service,
        probe=mock_probe,
    )


class TestLoadOverview:
    """Tests for PolicyAdministrationService.load_overview()."""

    @pytest.mark.asyncio
    async def test_projects_store_data_with_catalog(self, service):
        projection = await service.load_overview()

        assert [row.subject for row in projection.role_policies] == ["viewer"]
        assert [row.subject_name for row in projection.user_policies] == ["Alice"]
        assert [row.role for row in projection.role_assignments] == ["owner", "viewer"]

    @pytest.mark.asyncio
    async def test_reports_counts_to_probe(self, service, mock_probe):
        await service.load_overview()

        mock_probe.overview_loaded.assert_called_once_with(
            role_policy_count=1,
            user_policy_count=1,
            role_assignment_count=2,
        )


class TestAddRolePolicy:
    """Tests for PolicyAdministrationService.add_role_policy()."""

    @pytest.mark.asyncio
    async def test_adds_and_refetches(self, service, mock_store, mock_catalog_service):
        request = RolePolicyRequest("pm", "t1", "release", "write")

        projection = await service.add_role_policy(request)

        mock_store.add_role_policy.assert_awaited_once_with(request)
        mock_catalog_service.invalidate.assert_called_once()
        assert mock_store.list_policies.await_count == 1
        assert projection.role_policies[0].subject == "viewer"

    @pytest.mark.asyncio
    async def test_empty_tenant_rejected_before_any_store_call(self, service, mock_store):
        with pytest.raises(PolicyValidationError) as exc_info:
            await service.add_role_policy(RolePolicyRequest("pm", "", "project", "read"))

        assert "tenant" in exc_info.value.field_errors
        mock_store.add_role_policy.assert_not_called()
        mock_store.list_policies.assert_not_called()

    @pytest.mark.asyncio
    async def test_conflict_is_surfaced_without_refetch(
        self, service, mock_store, mock_catalog_service, mock_probe
    ):
        mock_store.add_role_policy.side_effect = ConflictError("policy already exists")

        with pytest.raises(ConflictError, match="policy already exists"):
            await service.add_role_policy(
                RolePolicyRequest("viewer", "t1", "project", "read")
            )

        mock_catalog_service.invalidate.assert_not_called()
        mock_store.list_policies.assert_not_called()
        mock_probe.mutation_rejected.assert_called_once()


class TestRemovals:
    """Tests for the removal operations and the protected-row guard."""

    @pytest.mark.asyncio
    async def test_remove_role_policy(self, service, mock_store):
        request = RolePolicyRequest("viewer", "t1", "project", "read")

        await service.remove_role_policy(request)

        mock_store.remove_role_policy.assert_awaited_once_with(request)

    @pytest.mark.asyncio
    async def test_owner_role_policy_is_protected(self, service, mock_store):
        with pytest.raises(ProtectedSubjectError):
            await service.remove_role_policy(
                RolePolicyRequest("owner", "t1", "project", "read")
            )

        mock_store.remove_role_policy.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_assignment_is_protected(self, service, mock_store, mock_probe):
        with pytest.raises(ProtectedSubjectError):
            await service.remove_user_role(UserRoleRequest("u2", "owner", "t1"))

        mock_store.remove_user_role.assert_not_called()
        mock_probe.protected_row_refused.assert_called_once_with(
            operation="remove_user_role", subject="owner"
        )

    @pytest.mark.asyncio
    async def test_admin_subject_cannot_be_removed_as_user_policy(
        self, service, mock_store
    ):
        with pytest.raises(ProtectedSubjectError):
            await service.remove_user_policy(UserPolicyRequest("admin", "t1", "*", "*"))

        mock_store.remove_user_policy.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_user_role_removes_exactly_that_triple(
        self, service, mock_store
    ):
        await service.remove_user_role(UserRoleRequest("u1", "viewer", "t1"))

        mock_store.remove_user_role.assert_awaited_once_with(
            UserRoleRequest(user_id="u1", role="viewer", tenant="t1")
        )

    @pytest.mark.asyncio
    async def test_not_found_is_terminal(self, service, mock_store):
        mock_store.remove_user_policy.side_effect = NotFoundError("policy not found")

        with pytest.raises(NotFoundError):
            await service.remove_user_policy(
                UserPolicyRequest("u1", "t2", "release", "write")
            )


class TestOtherMutations:
    """Tests for user policy and user role additions."""

    @pytest.mark.asyncio
    async def test_add_user_policy(self, service, mock_store, mock_probe):
        request = UserPolicyRequest("u2", "t1", "file", "download")

        await service.add_user_policy(request)

        mock_store.add_user_policy.assert_awaited_once_with(request)
        mock_probe.mutation_applied.assert_called_once_with(
            operation="add_user_policy",
            request={
                "user_id": "u2",
                "tenant": "t1",
                "object": "file",
                "action": "download",
            },
        )

    @pytest.mark.asyncio
    async def test_add_user_role_rejects_admin(self, service, mock_store):
        with pytest.raises(PolicyValidationError):
            await service.add_user_role(UserRoleRequest("u1", "admin", "t1"))

        mock_store.add_user_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_user_role(self, service, mock_store):
        request = UserRoleRequest("u1", "tester", "t2")

        await service.add_user_role(request)

        mock_store.add_user_role.assert_awaited_once_with(request)


class TestTenantMembers:
    """Tests for changing and removing tenant members."""

    @pytest.mark.asyncio
    async def test_change_member_role_refetches_members(self, service, mock_store):
        request = TenantMemberRoleRequest("t1", "u1", "tester")

        members = await service.change_member_role(request)

        mock_store.update_tenant_member_role.assert_awaited_once_with(request)
        assert [row.user for row in members] == ["u2", "u1"]
        assert mock_store.list_role_assignments.await_count == 2

    @pytest.mark.asyncio
    async def test_owner_role_cannot_be_changed(self, service, mock_store, mock_probe):
        with pytest.raises(ProtectedSubjectError):
            await service.change_member_role(
                TenantMemberRoleRequest("t1", "u2", "viewer")
            )

        mock_store.update_tenant_member_role.assert_not_called()
        mock_probe.protected_row_refused.assert_called_once_with(
            operation="change_member_role", subject="owner"
        )

    @pytest.mark.asyncio
    async def test_owner_is_not_a_member_role(self, service, mock_store):
        with pytest.raises(PolicyValidationError) as exc_info:
            await service.change_member_role(
                TenantMemberRoleRequest("t1", "u1", "owner")
            )

        assert set(exc_info.value.field_errors) == {"role"}
        mock_store.list_role_assignments.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_member_is_not_found(self, service, mock_store):
        with pytest.raises(NotFoundError):
            await service.change_member_role(
                TenantMemberRoleRequest("t2", "u1", "viewer")
            )

        mock_store.update_tenant_member_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_member(self, service, mock_store):
        request = TenantMemberRequest("t1", "u1")

        await service.remove_member(request)

        mock_store.remove_tenant_member.assert_awaited_once_with(request)

    @pytest.mark.asyncio
    async def test_owner_cannot_be_removed(self, service, mock_store):
        with pytest.raises(ProtectedSubjectError):
            await service.remove_member(TenantMemberRequest("t1", "u2"))

        mock_store.remove_tenant_member.assert_not_called()


class TestReads:
    """Tests for the read-only views."""

    @pytest.mark.asyncio
    async def test_tenant_users(self, service):
        members = await service.tenant_users("t1")

        assert [(row.user_name, row.role) for row in members] == [
            ("Bob", "owner"),
            ("Alice", "viewer"),
        ]
        assert [row.removable for row in members] == [False, True]

    @pytest.mark.asyncio
    async def test_get_user_permissions(self, service, mock_store):
        permissions = UserPermissions(
            user_id="u1",
            permissions=(PolicyTuple("u1", "t2", "release", "write"),),
            roles=("viewer",),
        )
        mock_store.get_user_permissions = AsyncMock(return_value=permissions)

        assert await service.get_user_permissions("u1") == permissions
        mock_store.get_user_permissions.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_vocabulary(self, service):
        vocabulary = await service.vocabulary()

        assert [option.code for option in vocabulary.actions] == [
            "read",
            "write",
            "delete",
        ]
