"""Client-side preconditions for policy mutations.

Checked before any request is built. A failing check raises
``PolicyValidationError`` naming every offending field, so the form can
highlight all of them at once.
"""

from __future__ import annotations

from dataclasses import asdict

from catalog.domain.value_objects import EntityCatalog
from permissions.domain.value_objects import (
    RolePolicyRequest,
    TenantMemberRequest,
    TenantMemberRoleRequest,
    UserPolicyRequest,
    UserRoleRequest,
)
from shared_kernel.authorization import (
    ASSIGNABLE_ROLES,
    TENANT_MEMBER_ROLES,
    is_assignable_role,
    is_tenant_member_role,
)
from shared_kernel.exceptions import PolicyValidationError

REQUIRED = "This field is required"
UNKNOWN_TENANT = "Unknown tenant"


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _required(errors: dict[str, str], **fields: str | None) -> None:
    for name, value in fields.items():
        if _blank(value):
            errors[name] = REQUIRED


def _check_role(errors: dict[str, str], role: str, member_only: bool = False) -> None:
    accepts, allowed = (
        (is_tenant_member_role, TENANT_MEMBER_ROLES)
        if member_only
        else (is_assignable_role, ASSIGNABLE_ROLES)
    )
    if "role" not in errors and not accepts(role):
        errors["role"] = f"Role must be one of: {', '.join(allowed)}"


def _check_tenant(
    errors: dict[str, str],
    tenant: str,
    catalog: EntityCatalog,
    field: str = "tenant",
) -> None:
    if field not in errors and not catalog.has_tenant(tenant):
        errors[field] = UNKNOWN_TENANT


def _raise_if_any(errors: dict[str, str]) -> None:
    if errors:
        raise PolicyValidationError(errors)


def validate_role_policy(request: RolePolicyRequest, catalog: EntityCatalog) -> None:
    """Validate a role policy request.

    Raises:
        PolicyValidationError: If any field is blank, the role is not
            assignable, or the tenant is unknown
    """
    errors: dict[str, str] = {}
    _required(
        errors,
        role=request.role,
        tenant=request.tenant,
        object=request.object,
        action=request.action,
    )
    _check_role(errors, request.role)
    _check_tenant(errors, request.tenant, catalog)
    _raise_if_any(errors)


def validate_user_policy(request: UserPolicyRequest, catalog: EntityCatalog) -> None:
    """Validate a direct user policy request.

    Raises:
        PolicyValidationError: If any field is blank or the tenant is unknown
    """
    errors: dict[str, str] = {}
    _required(
        errors,
        user_id=request.user_id,
        tenant=request.tenant,
        object=request.object,
        action=request.action,
    )
    _check_tenant(errors, request.tenant, catalog)
    _raise_if_any(errors)


def validate_user_role(request: UserRoleRequest, catalog: EntityCatalog) -> None:
    """Validate a user-role assignment request.

    Raises:
        PolicyValidationError: If any field is blank, the role is not
            assignable, or the tenant is unknown
    """
    errors: dict[str, str] = {}
    _required(
        errors,
        user_id=request.user_id,
        role=request.role,
        tenant=request.tenant,
    )
    _check_role(errors, request.role)
    _check_tenant(errors, request.tenant, catalog)
    _raise_if_any(errors)


def validate_member_role(
    request: TenantMemberRoleRequest, catalog: EntityCatalog
) -> None:
    """Validate a tenant member role change.

    Only the roles offered from a tenant's user list are accepted; admin
    and owner are never granted this way.

    Raises:
        PolicyValidationError: If any field is blank, the role is not a
            tenant member role, or the tenant is unknown
    """
    errors: dict[str, str] = {}
    _required(
        errors,
        tenant_id=request.tenant_id,
        user_id=request.user_id,
        role=request.role,
    )
    _check_role(errors, request.role, member_only=True)
    _check_tenant(errors, request.tenant_id, catalog, field="tenant_id")
    _raise_if_any(errors)


def validate_removal(
    request: RolePolicyRequest
    | UserPolicyRequest
    | UserRoleRequest
    | TenantMemberRequest,
) -> None:
    """Validate a removal request taken from a listed row.

    Only presence is checked: a row whose tenant has left the catalog, or
    whose role is not in the known enumeration, must still be removable.

    Raises:
        PolicyValidationError: If any field is blank
    """
    errors: dict[str, str] = {}
    _required(errors, **asdict(request))
    _raise_if_any(errors)
