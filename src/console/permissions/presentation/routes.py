"""HTTP routes for permissions administration.

Every mutation answers with re-fetched state, the overview or a tenant's
member list, so the caller always renders the latest snapshot of the
policy store.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from permissions.application.services import PolicyAdministrationService
from permissions.dependencies import (
    get_policy_admin_service,
    get_role_policy_dialog,
    get_user_policy_dialog,
    get_user_role_dialog,
)
from permissions.domain import TenantMemberRequest, TenantMemberRoleRequest
from permissions.presentation.dialogs import (
    MutationDialog,
    RolePolicyDialog,
    SubmitOutcome,
    UserPolicyDialog,
    UserRoleDialog,
)
from permissions.presentation.models import (
    OverviewResponse,
    RolePolicyBody,
    TenantMemberRoleBody,
    TenantUsersResponse,
    UserPermissionsResponse,
    UserPolicyBody,
    UserRoleBody,
    VocabularyResponse,
)
from shared_kernel.exceptions import (
    ConflictError,
    ConsoleError,
    NotFoundError,
    PolicyValidationError,
    ProtectedSubjectError,
)

router = APIRouter(
    prefix="/permissions",
    tags=["permissions"],
)

ServiceDep = Annotated[PolicyAdministrationService, Depends(get_policy_admin_service)]


def _to_http_error(error: ConsoleError) -> HTTPException:
    """Map the console error taxonomy onto HTTP status codes."""
    if isinstance(error, PolicyValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": error.message, "field_errors": error.field_errors},
        )
    if isinstance(error, ProtectedSubjectError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error.message)
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    # Transport failures and any other platform rejection
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message)


async def _submit(dialog: MutationDialog, body: BaseModel) -> OverviewResponse:
    """Fill an add dialog from a request body and submit it.

    Blank fields keep the dialog defaults, so an omitted tenant falls back
    to the configured one.
    """
    dialog.open()
    for name, value in body.model_dump().items():
        if value.strip():
            dialog.set_field(name, value)
    outcome = await dialog.submit()
    if outcome is not SubmitOutcome.SUCCEEDED:
        raise _to_http_error(dialog.failure)
    return OverviewResponse.from_domain(dialog.result)


@router.get("/overview")
async def get_overview(service: ServiceDep) -> OverviewResponse:
    """Get role policies, user policies and user roles grouped by tenant.

    Raises:
        HTTPException: 502 if the platform cannot be reached or rejects a read
    """
    try:
        projection = await service.load_overview()
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return OverviewResponse.from_domain(projection)


@router.get("/vocabulary")
async def get_vocabulary(service: ServiceDep) -> VocabularyResponse:
    """Get picker options for roles, objects and actions."""
    try:
        vocabulary = await service.vocabulary()
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return VocabularyResponse.from_domain(vocabulary)


@router.get("/tenants/{tenant_id}/users")
async def list_tenant_users(tenant_id: str, service: ServiceDep) -> TenantUsersResponse:
    """List the members of one tenant, protected roles first."""
    try:
        members = await service.tenant_users(tenant_id)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return TenantUsersResponse.from_domain(tenant_id, members)


@router.put("/tenants/{tenant_id}/users/{user_id}/role")
async def change_tenant_member_role(
    tenant_id: str,
    user_id: str,
    body: TenantMemberRoleBody,
    service: ServiceDep,
) -> TenantUsersResponse:
    """Replace the role a member holds in a tenant.

    Raises:
        HTTPException: 422 if the role is not a tenant member role
        HTTPException: 403 if the member is an admin or owner
        HTTPException: 404 if the user is not a member of the tenant
    """
    request = TenantMemberRoleRequest(
        tenant_id=tenant_id, user_id=user_id, role=body.role.strip()
    )
    try:
        members = await service.change_member_role(request)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return TenantUsersResponse.from_domain(tenant_id, members)


@router.delete("/tenants/{tenant_id}/users/{user_id}")
async def remove_tenant_member(
    tenant_id: str, user_id: str, service: ServiceDep
) -> TenantUsersResponse:
    """Remove a member, with every role they hold, from a tenant.

    Raises:
        HTTPException: 403 if the member is an admin or owner
        HTTPException: 404 if the user is not a member of the tenant
    """
    try:
        members = await service.remove_member(
            TenantMemberRequest(tenant_id=tenant_id, user_id=user_id)
        )
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return TenantUsersResponse.from_domain(tenant_id, members)


@router.get("/users/{user_id}")
async def get_user_permissions(
    user_id: str, service: ServiceDep
) -> UserPermissionsResponse:
    """Get one user's effective permissions and roles.

    Raises:
        HTTPException: 404 if the user is unknown to the platform
    """
    try:
        permissions = await service.get_user_permissions(user_id)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return UserPermissionsResponse.from_domain(permissions)


@router.post("/role-policies", status_code=status.HTTP_201_CREATED)
async def add_role_policy(
    body: RolePolicyBody,
    dialog: Annotated[RolePolicyDialog, Depends(get_role_policy_dialog)],
) -> OverviewResponse:
    """Grant a role an action on an object within a tenant.

    Raises:
        HTTPException: 422 if a field is missing or invalid
        HTTPException: 409 if the policy already exists
    """
    return await _submit(dialog, body)


@router.delete("/role-policies")
async def remove_role_policy(
    body: RolePolicyBody, service: ServiceDep
) -> OverviewResponse:
    """Revoke a role policy.

    Raises:
        HTTPException: 403 if the role is protected
        HTTPException: 404 if the policy no longer exists
    """
    try:
        projection = await service.remove_role_policy(body.to_domain())
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return OverviewResponse.from_domain(projection)


@router.post("/user-policies", status_code=status.HTTP_201_CREATED)
async def add_user_policy(
    body: UserPolicyBody,
    dialog: Annotated[UserPolicyDialog, Depends(get_user_policy_dialog)],
) -> OverviewResponse:
    """Grant a user a direct action on an object within a tenant."""
    return await _submit(dialog, body)


@router.delete("/user-policies")
async def remove_user_policy(
    body: UserPolicyBody, service: ServiceDep
) -> OverviewResponse:
    """Revoke a direct user policy."""
    try:
        projection = await service.remove_user_policy(body.to_domain())
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return OverviewResponse.from_domain(projection)


@router.post("/user-roles", status_code=status.HTTP_201_CREATED)
async def add_user_role(
    body: UserRoleBody,
    dialog: Annotated[UserRoleDialog, Depends(get_user_role_dialog)],
) -> OverviewResponse:
    """Assign a role to a user within a tenant."""
    return await _submit(dialog, body)


@router.delete("/user-roles")
async def remove_user_role(body: UserRoleBody, service: ServiceDep) -> OverviewResponse:
    """Remove exactly one ``(user, role, tenant)`` assignment.

    Raises:
        HTTPException: 403 if the role is admin or owner
        HTTPException: 404 if the assignment no longer exists
    """
    try:
        projection = await service.remove_user_role(body.to_domain())
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return OverviewResponse.from_domain(projection)
