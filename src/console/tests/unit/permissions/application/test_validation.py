"""Unit tests for client-side policy validation."""

import pytest

from permissions.application.validation import (
    validate_member_role,
    validate_removal,
    validate_role_policy,
    validate_user_policy,
    validate_user_role,
)
from permissions.domain import (
    RolePolicyRequest,
    TenantMemberRoleRequest,
    UserPolicyRequest,
    UserRoleRequest,
)
from shared_kernel.exceptions import PolicyValidationError


class TestValidateRolePolicy:
    """Tests for validate_role_policy()."""

    def test_accepts_complete_request(self, catalog):
        validate_role_policy(RolePolicyRequest("viewer", "t1", "project", "read"), catalog)

    def test_empty_tenant_is_rejected(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_role_policy(RolePolicyRequest("pm", "", "project", "read"), catalog)

        assert set(exc_info.value.field_errors) == {"tenant"}

    def test_reports_every_missing_field(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_role_policy(RolePolicyRequest(" ", "", "", "read"), catalog)

        assert set(exc_info.value.field_errors) == {"role", "tenant", "object"}

    def test_admin_is_not_an_assignable_role(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_role_policy(RolePolicyRequest("admin", "t1", "*", "*"), catalog)

        assert set(exc_info.value.field_errors) == {"role"}

    def test_unknown_tenant_is_rejected(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_role_policy(
                RolePolicyRequest("viewer", "t-unknown", "project", "read"), catalog
            )

        assert exc_info.value.field_errors == {"tenant": "Unknown tenant"}


class TestValidateUserPolicy:
    """Tests for validate_user_policy()."""

    def test_accepts_complete_request(self, catalog):
        validate_user_policy(UserPolicyRequest("u1", "t2", "release", "write"), catalog)

    def test_missing_user_is_rejected(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_user_policy(UserPolicyRequest("", "t1", "project", "read"), catalog)

        assert set(exc_info.value.field_errors) == {"user_id"}


class TestValidateUserRole:
    """Tests for validate_user_role()."""

    def test_accepts_assignable_role(self, catalog):
        validate_user_role(UserRoleRequest("u1", "developer", "t1"), catalog)

    def test_rejects_unknown_role(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_user_role(UserRoleRequest("u1", "editor", "t1"), catalog)

        assert set(exc_info.value.field_errors) == {"role"}


class TestValidateMemberRole:
    """Tests for validate_member_role()."""

    def test_accepts_tenant_member_role(self, catalog):
        validate_member_role(TenantMemberRoleRequest("t1", "u1", "tester"), catalog)

    @pytest.mark.parametrize("role", ["owner", "admin"])
    def test_protected_roles_are_not_offered(self, catalog, role):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_member_role(TenantMemberRoleRequest("t1", "u1", role), catalog)

        assert set(exc_info.value.field_errors) == {"role"}
        assert "owner" not in exc_info.value.field_errors["role"]

    def test_unknown_tenant_is_reported_on_tenant_id(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_member_role(TenantMemberRoleRequest("t9", "u1", "viewer"), catalog)

        assert exc_info.value.field_errors == {"tenant_id": "Unknown tenant"}

    def test_blank_role_is_required(self, catalog):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_member_role(TenantMemberRoleRequest("t1", "u1", " "), catalog)

        assert exc_info.value.field_errors == {"role": "This field is required"}


class TestValidateRemoval:
    """Tests for validate_removal()."""

    def test_only_presence_is_checked(self):
        validate_removal(UserRoleRequest("u1", "legacy-role", "deleted-tenant"))

    def test_blank_field_is_rejected(self):
        with pytest.raises(PolicyValidationError) as exc_info:
            validate_removal(UserPolicyRequest("u1", "t1", "", "read"))

        assert set(exc_info.value.field_errors) == {"object"}
