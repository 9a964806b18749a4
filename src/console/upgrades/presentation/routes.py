"""HTTP routes for upgrade-target management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shared_kernel.exceptions import (
    ConflictError,
    ConsoleError,
    NotFoundError,
    PolicyValidationError,
)
from upgrades.application import ActivationController
from upgrades.dependencies import get_activation_controller
from upgrades.domain import UpgradeTarget, UpgradeTargetFilter
from upgrades.ports import CollectionRefreshError, OperationInProgressError
from upgrades.presentation.models import (
    CreateUpgradeTargetRequest,
    UpdateUpgradeTargetRequest,
    UpgradeTargetListResponse,
    UpgradeTargetResponse,
)

router = APIRouter(
    prefix="/upgrade-targets",
    tags=["upgrade-targets"],
)

ControllerDep = Annotated[ActivationController, Depends(get_activation_controller)]


def _to_http_error(error: ConsoleError) -> HTTPException:
    """Map the console error taxonomy onto HTTP status codes."""
    if isinstance(error, PolicyValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": error.message, "field_errors": error.field_errors},
        )
    if isinstance(error, (ConflictError, OperationInProgressError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    # Transport failures and any other platform rejection
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message)


async def _fresh_target(controller: ActivationController, target_id: str) -> UpgradeTarget:
    """Re-fetch the collection and pick one target from it.

    Raises:
        NotFoundError: If the target is not in the fresh collection
    """
    await controller.refresh()
    target = controller.get(target_id)
    if target is None:
        raise NotFoundError(f"Upgrade target {target_id} not found")
    return target


@router.get("")
async def list_upgrade_targets(
    controller: ControllerDep,
    project_id: Annotated[str | None, Query()] = None,
    package_id: Annotated[str | None, Query()] = None,
    is_active: Annotated[bool | None, Query()] = None,
) -> UpgradeTargetListResponse:
    """List upgrade targets, optionally filtered.

    Raises:
        HTTPException: 502 if the platform cannot be reached
    """
    filters = UpgradeTargetFilter(
        project_id=project_id, package_id=package_id, is_active=is_active
    )
    try:
        targets = await controller.list_targets(filters)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return UpgradeTargetListResponse.from_domain(targets)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_upgrade_target(
    request: CreateUpgradeTargetRequest,
    controller: ControllerDep,
) -> UpgradeTargetResponse:
    """Create an upgrade target from a project/package/release selection.

    Raises:
        HTTPException: 422 if a selection or the name is missing
        HTTPException: 409 if the platform refuses the target

    A target that was created but could not be re-listed is still
    answered with 201.
    """
    try:
        target = await controller.create(request.to_form())
    except CollectionRefreshError as e:
        return UpgradeTargetResponse.from_domain(e.created)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return UpgradeTargetResponse.from_domain(target)


@router.patch("/{target_id}")
async def update_upgrade_target(
    target_id: str,
    request: UpdateUpgradeTargetRequest,
    controller: ControllerDep,
) -> UpgradeTargetListResponse:
    """Rename or re-describe an upgrade target.

    Raises:
        HTTPException: 404 if the target does not exist
        HTTPException: 422 if the name is blank
    """
    try:
        target = await _fresh_target(controller, target_id)
        targets = await controller.update(target, request.name, request.description)
    except CollectionRefreshError as e:
        return UpgradeTargetListResponse.stale(e)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return UpgradeTargetListResponse.from_domain(targets)


@router.post("/{target_id}/toggle")
async def toggle_upgrade_target(
    target_id: str,
    controller: ControllerDep,
) -> UpgradeTargetListResponse:
    """Activate or deactivate an upgrade target.

    Activating a target first deactivates the currently active one.
    When the toggle was applied but the list could not be reloaded, the
    answer carries no targets and ``refreshed`` is false.

    Raises:
        HTTPException: 404 if the target does not exist
        HTTPException: 409 if the platform refuses a step, or the target
            already has a request in flight
    """
    try:
        target = await _fresh_target(controller, target_id)
        targets = await controller.set_active(target)
    except CollectionRefreshError as e:
        return UpgradeTargetListResponse.stale(e)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return UpgradeTargetListResponse.from_domain(targets)


@router.delete("/{target_id}")
async def delete_upgrade_target(
    target_id: str,
    controller: ControllerDep,
) -> UpgradeTargetListResponse:
    """Delete an inactive upgrade target.

    Raises:
        HTTPException: 404 if the target does not exist
        HTTPException: 409 if the target is active
    """
    try:
        target = await _fresh_target(controller, target_id)
        targets = await controller.delete(target)
    except CollectionRefreshError as e:
        return UpgradeTargetListResponse.stale(e)
    except ConsoleError as e:
        raise _to_http_error(e) from e
    return UpgradeTargetListResponse.from_domain(targets)
