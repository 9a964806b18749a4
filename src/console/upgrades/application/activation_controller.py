"""Upgrade-target activation controller.

Keeps at most one upgrade target active across the whole collection.
The platform offers no transaction spanning two targets, so switching the
active target is a two-step sequence with a fixed order: deactivate the
current target, and only after the platform confirms it, activate the new
one. A failure between the steps leaves zero active targets, never two.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from shared_kernel.exceptions import ConsoleError, PolicyValidationError
from upgrades.application.observability import (
    ActivationProbe,
    DefaultActivationProbe,
)
from upgrades.domain import (
    UpgradeTarget,
    UpgradeTargetFilter,
    UpgradeTargetForm,
    active_targets,
    find_other_active,
)
from upgrades.ports import (
    ActiveTargetDeletionError,
    CollectionRefreshError,
    IUpgradeTargetStore,
    OperationInProgressError,
)

REQUIRED = "This field is required"


class ActivationController:
    """Mutations over the upgrade-target collection.

    Holds the last fetched (unfiltered) collection, which is what the
    activation sequence consults to find the currently active target, and
    the set of target ids with a request in flight.
    """

    def __init__(
        self,
        store: IUpgradeTargetStore,
        probe: ActivationProbe | None = None,
    ):
        """Initialize ActivationController with dependencies.

        Args:
            store: Port to the platform's upgrade-target collection
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultActivationProbe()
        self._targets: tuple[UpgradeTarget, ...] = ()
        self._in_flight: set[str] = set()
        self._activating: str | None = None

    @property
    def targets(self) -> tuple[UpgradeTarget, ...]:
        """The last fetched collection."""
        return self._targets

    def get(self, target_id: str) -> UpgradeTarget | None:
        """Find a target in the last fetched collection."""
        for target in self._targets:
            if target.id == target_id:
                return target
        return None

    def is_busy(self, target_id: str) -> bool:
        """True while a toggle or delete of this target is in flight."""
        return target_id in self._in_flight

    async def refresh(self) -> tuple[UpgradeTarget, ...]:
        """Re-fetch the full collection; it replaces the local one."""
        targets = tuple(await self._store.list_targets())
        active = active_targets(targets)
        self._probe.targets_loaded(count=len(targets), active_count=len(active))
        if len(active) > 1:
            self._probe.multiple_active_detected([target.id for target in active])
        self._targets = targets
        return targets

    async def list_targets(
        self, filters: UpgradeTargetFilter | None = None
    ) -> tuple[UpgradeTarget, ...]:
        """List targets for display.

        An unfiltered listing also refreshes the local collection; a
        filtered one is a view only and leaves it untouched.
        """
        if filters is None or not filters.as_params():
            return await self.refresh()
        return tuple(await self._store.list_targets(filters))

    async def set_active(self, target: UpgradeTarget) -> tuple[UpgradeTarget, ...]:
        """Toggle ``target``, keeping at most one target active.

        An active target is simply deactivated. An inactive one becomes
        active after the other active target, if any, has been
        deactivated. If that deactivation fails the activation is never
        issued and the failure propagates. Only one activation runs at a
        time: between its two steps the collection shows no active target,
        so a second activation started then would not know what to
        deactivate.

        Returns:
            The re-fetched collection

        Raises:
            OperationInProgressError: If either target already has a
                request in flight, or another activation is running
            CollectionRefreshError: If the toggle was applied but the
                re-fetch failed
        """
        if target.is_active:
            async with self._claim(target.id):
                await self._store.set_active(target.id, False)
                self._probe.target_deactivated(target.id)
            return await self._refresh_after("deactivated", target.id)

        current = find_other_active(self._targets, target)
        claimed = (target.id,) if current is None else (target.id, current.id)
        async with self._claim(*claimed, activating=True):
            if current is not None:
                try:
                    await self._store.set_active(current.id, False)
                except Exception as e:
                    self._probe.activation_aborted(
                        target_id=target.id, blocking_id=current.id, error=e
                    )
                    raise
                self._probe.target_deactivated(current.id)

            await self._store.set_active(target.id, True)
            self._probe.target_activated(
                target.id, replaced_id=current.id if current is not None else None
            )
        return await self._refresh_after("activated", target.id)

    async def create(self, form: UpgradeTargetForm) -> UpgradeTarget:
        """Create a target from a completed form.

        Raises:
            PolicyValidationError: If a selection or the name is missing
            CollectionRefreshError: If the target was created but the
                re-fetch failed; ``created`` carries the new target
        """
        errors = form.field_errors
        if errors:
            raise PolicyValidationError(errors)

        created = await self._store.create(form.to_request())
        self._probe.target_created(created.id, name=created.name)
        await self._refresh_after("created", created.id, created=created)
        return created

    async def update(
        self, target: UpgradeTarget, name: str, description: str
    ) -> tuple[UpgradeTarget, ...]:
        """Rename or re-describe a target.

        Raises:
            PolicyValidationError: If the name is blank
        """
        if not name.strip():
            raise PolicyValidationError({"name": REQUIRED})

        await self._store.update_details(target.id, name.strip(), description.strip())
        self._probe.target_updated(target.id)
        return await self._refresh_after("updated", target.id)

    async def delete(self, target: UpgradeTarget) -> tuple[UpgradeTarget, ...]:
        """Delete an inactive target.

        Raises:
            ActiveTargetDeletionError: If the target is active; no request
                is built
            OperationInProgressError: If the target is busy
        """
        if target.is_active:
            self._probe.active_deletion_refused(target.id)
            raise ActiveTargetDeletionError(target.id)

        async with self._claim(target.id):
            await self._store.delete(target.id)
            self._probe.target_deleted(target.id)
        return await self._refresh_after("deleted", target.id)

    async def _refresh_after(
        self,
        operation: str,
        target_id: str,
        created: UpgradeTarget | None = None,
    ) -> tuple[UpgradeTarget, ...]:
        try:
            return await self.refresh()
        except ConsoleError as e:
            self._probe.refresh_failed(operation=operation, target_id=target_id, error=e)
            raise CollectionRefreshError(
                operation, target_id, cause=e, created=created
            ) from e

    @asynccontextmanager
    async def _claim(
        self, *target_ids: str, activating: bool = False
    ) -> AsyncIterator[None]:
        if activating and self._activating is not None:
            self._probe.operation_in_progress(self._activating)
            raise OperationInProgressError(self._activating)
        for target_id in target_ids:
            if target_id in self._in_flight:
                self._probe.operation_in_progress(target_id)
                raise OperationInProgressError(target_id)
        self._in_flight.update(target_ids)
        if activating:
            self._activating = target_ids[0]
        try:
            yield
        finally:
            self._in_flight.difference_update(target_ids)
            if activating:
                self._activating = None
