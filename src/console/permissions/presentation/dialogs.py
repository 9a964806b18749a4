"""Dialog view-models for the permissions administration views.

Each dialog is a small state machine::

    closed -> editing -> submitting -> closed        (success)
                                    -> editing       (failure, form kept)

Closing a dialog while its request is in flight does not cancel the
request. The outcome is discarded instead of being applied to a dialog
that is no longer showing it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Generic, TypeVar

from permissions.domain import (
    Projection,
    RolePolicyRequest,
    UserPolicyRequest,
    UserRoleRequest,
)
from shared_kernel.exceptions import ConsoleError, PolicyValidationError

REQUIRED = "This field is required"


class DialogState(StrEnum):
    """Lifecycle of an add dialog."""

    CLOSED = "closed"
    EDITING = "editing"
    SUBMITTING = "submitting"


class SubmitOutcome(StrEnum):
    """Result of one submit attempt, as seen by the dialog."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REJECTED = "rejected"
    DISCARDED = "discarded"


@dataclass
class RolePolicyForm:
    role: str = ""
    tenant: str = ""
    object: str = ""
    action: str = ""


@dataclass
class UserPolicyForm:
    user_id: str = ""
    tenant: str = ""
    object: str = ""
    action: str = ""


@dataclass
class UserRoleForm:
    user_id: str = ""
    role: str = ""
    tenant: str = ""


FormT = TypeVar("FormT", RolePolicyForm, UserPolicyForm, UserRoleForm)
RequestT = TypeVar("RequestT", RolePolicyRequest, UserPolicyRequest, UserRoleRequest)


class MutationDialog(Generic[FormT, RequestT]):
    """Base add dialog bound to one service mutation.

    Subclasses provide the form factory and the form-to-request mapping.
    All form fields are required.
    """

    def __init__(
        self,
        submit: Callable[[RequestT], Awaitable[Projection]],
        default_tenant: str = "",
    ):
        self._submit = submit
        self._default_tenant = default_tenant
        self._generation = 0
        self.state = DialogState.CLOSED
        self.form: FormT = self._new_form(default_tenant)
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.failure: ConsoleError | None = None
        self.result: Projection | None = None

    def _new_form(self, tenant: str) -> FormT:
        raise NotImplementedError

    def _to_request(self, form: FormT) -> RequestT:
        raise NotImplementedError

    def open(self, tenant_id: str | None = None) -> None:
        """Open the dialog on a fresh default form.

        Args:
            tenant_id: Tenant to preselect; defaults to the configured one
        """
        self._generation += 1
        self.form = self._new_form(tenant_id or self._default_tenant)
        self.error = None
        self.field_errors = {}
        self.failure = None
        self.result = None
        self.state = DialogState.EDITING

    def close(self) -> None:
        """Close the dialog; an in-flight outcome will be discarded."""
        self._generation += 1
        self.state = DialogState.CLOSED

    def set_field(self, name: str, value: str) -> None:
        """Update one form field while editing.

        Raises:
            KeyError: If the form has no such field
        """
        if name not in self.field_names:
            raise KeyError(name)
        setattr(self.form, name, value)
        self.field_errors.pop(name, None)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in fields(self.form))

    @property
    def missing_fields(self) -> tuple[str, ...]:
        return tuple(
            name for name in self.field_names if not getattr(self.form, name).strip()
        )

    @property
    def can_submit(self) -> bool:
        return self.state is DialogState.EDITING and not self.missing_fields

    async def submit(self) -> SubmitOutcome:
        """Submit the form through the bound mutation.

        Missing fields are re-checked here, so a submit that bypassed
        ``can_submit`` is recorded as a validation error and makes no call.
        """
        if self.state is not DialogState.EDITING:
            return SubmitOutcome.REJECTED

        missing = self.missing_fields
        if missing:
            self._record_error(
                PolicyValidationError({name: REQUIRED for name in missing})
            )
            return SubmitOutcome.REJECTED

        generation = self._generation
        self.state = DialogState.SUBMITTING
        self.error = None
        self.field_errors = {}
        self.failure = None
        try:
            result = await self._submit(self._to_request(self.form))
        except ConsoleError as e:
            if generation != self._generation:
                return SubmitOutcome.DISCARDED
            self._record_error(e)
            self.state = DialogState.EDITING
            return SubmitOutcome.FAILED

        if generation != self._generation:
            return SubmitOutcome.DISCARDED
        self.result = result
        self.state = DialogState.CLOSED
        return SubmitOutcome.SUCCEEDED

    def _record_error(self, error: ConsoleError) -> None:
        self.failure = error
        self.error = error.message
        if isinstance(error, PolicyValidationError):
            self.field_errors = dict(error.field_errors)


class RolePolicyDialog(MutationDialog[RolePolicyForm, RolePolicyRequest]):
    """Add-role-policy dialog."""

    def _new_form(self, tenant: str) -> RolePolicyForm:
        return RolePolicyForm(tenant=tenant)

    def _to_request(self, form: RolePolicyForm) -> RolePolicyRequest:
        return RolePolicyRequest(
            role=form.role.strip(),
            tenant=form.tenant.strip(),
            object=form.object.strip(),
            action=form.action.strip(),
        )


class UserPolicyDialog(MutationDialog[UserPolicyForm, UserPolicyRequest]):
    """Add-user-policy dialog."""

    def _new_form(self, tenant: str) -> UserPolicyForm:
        return UserPolicyForm(tenant=tenant)

    def _to_request(self, form: UserPolicyForm) -> UserPolicyRequest:
        return UserPolicyRequest(
            user_id=form.user_id.strip(),
            tenant=form.tenant.strip(),
            object=form.object.strip(),
            action=form.action.strip(),
        )


class UserRoleDialog(MutationDialog[UserRoleForm, UserRoleRequest]):
    """Assign-role dialog, also used from a tenant's user list."""

    def _new_form(self, tenant: str) -> UserRoleForm:
        return UserRoleForm(tenant=tenant)

    def _to_request(self, form: UserRoleForm) -> UserRoleRequest:
        return UserRoleRequest(
            user_id=form.user_id.strip(),
            role=form.role.strip(),
            tenant=form.tenant.strip(),
        )
