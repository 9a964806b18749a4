"""Unit tests for the enhanced policy projection."""

import pytest

from catalog.domain.value_objects import EntityCatalog
from permissions.domain import (
    PolicyKind,
    PolicyTuple,
    RoleAssignment,
    build_vocabulary,
    classify_policy,
    project,
)


def _policy(subject, domain="t1", obj="project", action="read") -> PolicyTuple:
    return PolicyTuple(subject=subject, domain=domain, object=obj, action=action)


class TestPartition:
    """Tests for partitioning tuples into role and user policies."""

    def test_admin_tuple_excluded_and_role_tuple_kept(self, catalog):
        pm_tuple = _policy("pm", "t1", "project", "read")
        admin_tuple = _policy("admin", "t1", "*", "*")

        projection = project([pm_tuple, admin_tuple], [], catalog)

        assert [row.to_tuple() for row in projection.role_policies] == [pm_tuple]
        assert projection.user_policies == ()

    def test_admin_never_appears_in_either_partition(self, catalog):
        raw = [
            _policy("admin", "t1"),
            _policy("admin", "t2", "release", "delete"),
            _policy("viewer"),
            _policy("u1"),
        ]

        projection = project(raw, [], catalog)

        subjects = [
            row.subject
            for row in projection.role_policies + projection.user_policies
        ]
        assert "admin" not in subjects

    def test_partitions_are_disjoint_and_exhaustive_over_non_admin(self, catalog):
        raw = [
            _policy("viewer"),
            _policy("owner", "t2"),
            _policy("u1", "t1", "release", "write"),
            _policy("ghost-user", "t9"),
            _policy("admin"),
            _policy("developer", "t2", "package", "upload"),
        ]

        projection = project(raw, [], catalog)

        role_rows = {row.to_tuple() for row in projection.role_policies}
        user_rows = {row.to_tuple() for row in projection.user_policies}
        non_admin = {policy for policy in raw if policy.subject != "admin"}
        assert role_rows.isdisjoint(user_rows)
        assert role_rows | user_rows == non_admin
        assert all(row.kind is PolicyKind.ROLE for row in projection.role_policies)
        assert all(row.kind is PolicyKind.USER for row in projection.user_policies)

    def test_projection_is_pure(self, catalog):
        raw = [_policy("viewer"), _policy("u2", "t2"), _policy("admin")]
        roles = [RoleAssignment("u1", "viewer", "t1"), RoleAssignment("u2", "owner", "t1")]

        assert project(raw, roles, catalog) == project(raw, roles, catalog)


class TestClassifyPolicy:
    """Tests for classify_policy()."""

    @pytest.mark.parametrize(
        ("subject", "kind"),
        [
            ("admin", PolicyKind.SUPERUSER),
            ("owner", PolicyKind.ROLE),
            ("tester", PolicyKind.ROLE),
            ("u-7", PolicyKind.USER),
        ],
    )
    def test_kind_is_derived_from_subject(self, subject, kind):
        assert classify_policy(_policy(subject)) is kind


class TestDisplayNames:
    """Tests for display-name resolution and degradation."""

    def test_role_subject_resolved_through_role_table(self, catalog):
        projection = project([_policy("viewer")], [], catalog)

        row = projection.role_policies[0]
        assert row.subject_name == "Viewer"
        assert row.domain_name == "Acme"
        assert row.object_name == "Project"
        assert row.action_name == "Read"

    def test_user_subject_resolved_through_user_catalog(self, catalog):
        projection = project([_policy("u2", "t2")], [], catalog)

        row = projection.user_policies[0]
        assert row.subject_name == "Bob"
        assert row.domain_name == "Globex"

    def test_missing_joins_degrade_to_raw_ids(self):
        projection = project(
            [_policy("deleted-user", "gone-tenant", "widget", "poke")],
            [RoleAssignment("deleted-user", "viewer", "gone-tenant")],
            EntityCatalog.empty(),
        )

        row = projection.user_policies[0]
        assert row.subject_name == "deleted-user"
        assert row.domain_name == "gone-tenant"
        assert row.object_name == "widget"
        assert row.action_name == "poke"
        assignment = projection.role_assignments[0]
        assert assignment.user_name == "deleted-user"
        assert assignment.domain_name == "gone-tenant"


class TestGrouping:
    """Tests for tenant grouping and assignment ordering."""

    def test_groups_follow_first_occurrence_order(self, catalog):
        raw = [
            _policy("viewer", "t2"),
            _policy("user", "t1"),
            _policy("pm", "t2", "release", "write"),
        ]

        groups = project(raw, [], catalog).role_policies_by_tenant

        assert [group.domain for group in groups] == ["t2", "t1"]
        assert [group.domain_name for group in groups] == ["Globex", "Acme"]
        assert len(groups[0].rows) == 2

    def test_role_assignments_ordered_by_priority_stably(self, catalog):
        roles = [
            RoleAssignment("u1", "viewer", "t1"),
            RoleAssignment("u2", "tester", "t1"),
            RoleAssignment("u2", "owner", "t1"),
            RoleAssignment("u1", "user", "t2"),
            RoleAssignment("u3", "admin", "t1"),
            RoleAssignment("u1", "pm", "t1"),
        ]

        ordered = project([], roles, catalog).role_assignments

        assert [(row.user, row.role) for row in ordered] == [
            ("u3", "admin"),
            ("u2", "owner"),
            ("u1", "user"),
            ("u1", "viewer"),
            ("u2", "tester"),
            ("u1", "pm"),
        ]

    def test_tenant_members_filters_one_tenant(self, catalog):
        roles = [
            RoleAssignment("u1", "viewer", "t1"),
            RoleAssignment("u2", "user", "t2"),
            RoleAssignment("u2", "owner", "t1"),
        ]

        members = project([], roles, catalog).tenant_members("t1")

        assert [(row.user, row.role) for row in members] == [
            ("u2", "owner"),
            ("u1", "viewer"),
        ]


class TestRemovability:
    """Tests for the protected-row rule on enhanced rows."""

    def test_owner_rows_are_not_removable(self, catalog):
        projection = project(
            [_policy("owner"), _policy("viewer")],
            [RoleAssignment("u2", "owner", "t1"), RoleAssignment("u1", "viewer", "t1")],
            catalog,
        )

        assert [row.removable for row in projection.role_policies] == [False, True]
        assert [row.removable for row in projection.role_assignments] == [False, True]


class TestFromRow:
    """Tests for parsing raw store rows."""

    def test_policy_row_must_have_four_fields(self):
        with pytest.raises(ValueError):
            PolicyTuple.from_row(["viewer", "t1", "project"])

    def test_role_row_must_have_three_fields(self):
        with pytest.raises(ValueError):
            RoleAssignment.from_row(["u1", "viewer"])

    def test_rows_parse_in_store_order(self):
        assert PolicyTuple.from_row(["u1", "t1", "file", "upload"]) == _policy(
            "u1", "t1", "file", "upload"
        )
        assert RoleAssignment.from_row(["u1", "viewer", "t1"]) == RoleAssignment(
            user="u1", role="viewer", domain="t1"
        )


class TestBuildVocabulary:
    """Tests for picker option building."""

    def test_options_carry_labels(self, catalog):
        vocabulary = build_vocabulary(catalog)

        assert [option.code for option in vocabulary.objects] == [
            "project",
            "package",
            "release",
        ]
        assert vocabulary.actions[0].label == "Read (read)"
        assert "admin" not in [option.code for option in vocabulary.assignable_roles]
        assert "owner" not in [option.code for option in vocabulary.tenant_member_roles]
        assert vocabulary.roles[0].label == "Administrator (admin)"
