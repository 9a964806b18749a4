"""Upgrade target store protocol (port)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from upgrades.domain.value_objects import (
    NewUpgradeTarget,
    UpgradeTarget,
    UpgradeTargetFilter,
)


@runtime_checkable
class IUpgradeTargetStore(Protocol):
    """Server-owned collection of upgrade targets.

    There is no transaction spanning two calls; each method is one
    independent request.
    """

    async def list_targets(
        self, filters: UpgradeTargetFilter | None = None
    ) -> list[UpgradeTarget]:
        """List upgrade targets, optionally filtered."""
        ...

    async def create(self, request: NewUpgradeTarget) -> UpgradeTarget:
        """Create an upgrade target and return it as stored."""
        ...

    async def set_active(self, target_id: str, is_active: bool) -> None:
        """Flip one target's ``is_active`` flag.

        Raises:
            NotFoundError: If the target does not exist
            ConflictError: If the platform refuses the change
        """
        ...

    async def update_details(self, target_id: str, name: str, description: str) -> None:
        """Rename or re-describe a target.

        Raises:
            NotFoundError: If the target does not exist
        """
        ...

    async def delete(self, target_id: str) -> None:
        """Delete a target.

        Raises:
            ConflictError: If the platform refuses, e.g. the target is active
        """
        ...
