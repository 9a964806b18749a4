"""Unit tests for the add-dialog state machines."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from permissions.domain import Projection, RolePolicyRequest, UserRoleRequest
from permissions.presentation.dialogs import (
    DialogState,
    RolePolicyDialog,
    SubmitOutcome,
    UserRoleDialog,
)
from shared_kernel.exceptions import ConflictError, PolicyValidationError

EMPTY_PROJECTION = Projection(role_policies=(), user_policies=(), role_assignments=())


def _fill_role_policy(dialog: RolePolicyDialog) -> None:
    dialog.set_field("role", "viewer")
    dialog.set_field("object", "project")
    dialog.set_field("action", "read")


class TestOpenAndEdit:
    """Tests for opening a dialog and editing its form."""

    def test_starts_closed(self):
        dialog = RolePolicyDialog(AsyncMock(), default_tenant="t1")

        assert dialog.state is DialogState.CLOSED
        assert not dialog.can_submit

    def test_open_preselects_default_tenant(self):
        dialog = RolePolicyDialog(AsyncMock(), default_tenant="t1")

        dialog.open()

        assert dialog.state is DialogState.EDITING
        assert dialog.form.tenant == "t1"
        assert dialog.form.role == ""

    def test_open_with_explicit_tenant(self):
        dialog = UserRoleDialog(AsyncMock(), default_tenant="t1")

        dialog.open(tenant_id="t2")

        assert dialog.form.tenant == "t2"

    def test_reopen_resets_form(self):
        dialog = RolePolicyDialog(AsyncMock(), default_tenant="t1")
        dialog.open()
        dialog.set_field("role", "pm")

        dialog.close()
        dialog.open()

        assert dialog.form.role == ""

    def test_unknown_field_raises_key_error(self):
        dialog = RolePolicyDialog(AsyncMock())
        dialog.open()

        with pytest.raises(KeyError):
            dialog.set_field("user_id", "u1")

    def test_can_submit_only_when_every_field_is_set(self):
        dialog = RolePolicyDialog(AsyncMock(), default_tenant="t1")
        dialog.open()
        dialog.set_field("role", "viewer")

        assert dialog.missing_fields == ("object", "action")
        assert not dialog.can_submit

        dialog.set_field("object", "project")
        dialog.set_field("action", "read")

        assert dialog.can_submit


class TestSubmit:
    """Tests for submitting a dialog."""

    @pytest.mark.asyncio
    async def test_missing_fields_make_no_call(self):
        submit = AsyncMock()
        dialog = RolePolicyDialog(submit)
        dialog.open()
        dialog.set_field("role", "viewer")

        outcome = await dialog.submit()

        assert outcome is SubmitOutcome.REJECTED
        submit.assert_not_called()
        assert set(dialog.field_errors) == {"tenant", "object", "action"}
        assert isinstance(dialog.failure, PolicyValidationError)
        assert dialog.state is DialogState.EDITING

    @pytest.mark.asyncio
    async def test_submit_when_closed_is_rejected(self):
        submit = AsyncMock()
        dialog = RolePolicyDialog(submit)

        assert await dialog.submit() is SubmitOutcome.REJECTED
        submit.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_closes_dialog(self):
        submit = AsyncMock(return_value=EMPTY_PROJECTION)
        dialog = RolePolicyDialog(submit, default_tenant="t1")
        dialog.open()
        _fill_role_policy(dialog)

        outcome = await dialog.submit()

        assert outcome is SubmitOutcome.SUCCEEDED
        assert dialog.state is DialogState.CLOSED
        assert dialog.result == EMPTY_PROJECTION
        submit.assert_awaited_once_with(
            RolePolicyRequest(role="viewer", tenant="t1", object="project", action="read")
        )

    @pytest.mark.asyncio
    async def test_values_are_stripped(self):
        submit = AsyncMock(return_value=EMPTY_PROJECTION)
        dialog = UserRoleDialog(submit)
        dialog.open(tenant_id=" t1 ")
        dialog.set_field("user_id", " u1")
        dialog.set_field("role", "tester ")

        await dialog.submit()

        submit.assert_awaited_once_with(UserRoleRequest("u1", "tester", "t1"))

    @pytest.mark.asyncio
    async def test_failure_keeps_dialog_open_with_values(self):
        submit = AsyncMock(side_effect=ConflictError("policy already exists"))
        dialog = RolePolicyDialog(submit, default_tenant="t1")
        dialog.open()
        _fill_role_policy(dialog)

        outcome = await dialog.submit()

        assert outcome is SubmitOutcome.FAILED
        assert dialog.state is DialogState.EDITING
        assert dialog.error == "policy already exists"
        assert isinstance(dialog.failure, ConflictError)
        assert dialog.form.role == "viewer"
        assert dialog.can_submit

    @pytest.mark.asyncio
    async def test_service_validation_errors_are_shown_per_field(self):
        submit = AsyncMock(side_effect=PolicyValidationError({"tenant": "Unknown tenant"}))
        dialog = RolePolicyDialog(submit, default_tenant="t9")
        dialog.open()
        _fill_role_policy(dialog)

        await dialog.submit()

        assert dialog.field_errors == {"tenant": "Unknown tenant"}

    @pytest.mark.asyncio
    async def test_close_while_submitting_discards_outcome(self):
        release = asyncio.Event()

        async def slow_submit(request):
            await release.wait()
            return EMPTY_PROJECTION

        dialog = RolePolicyDialog(slow_submit, default_tenant="t1")
        dialog.open()
        _fill_role_policy(dialog)

        pending = asyncio.create_task(dialog.submit())
        await asyncio.sleep(0)
        assert dialog.state is DialogState.SUBMITTING

        dialog.close()
        release.set()

        assert await pending is SubmitOutcome.DISCARDED
        assert dialog.state is DialogState.CLOSED
        assert dialog.result is None

    @pytest.mark.asyncio
    async def test_failure_after_close_is_discarded(self):
        release = asyncio.Event()

        async def failing_submit(request):
            await release.wait()
            raise ConflictError("policy already exists")

        dialog = RolePolicyDialog(failing_submit, default_tenant="t1")
        dialog.open()
        _fill_role_policy(dialog)

        pending = asyncio.create_task(dialog.submit())
        await asyncio.sleep(0)
        dialog.close()
        release.set()

        assert await pending is SubmitOutcome.DISCARDED
        assert dialog.error is None
        assert dialog.state is DialogState.CLOSED
