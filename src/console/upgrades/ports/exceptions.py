"""Exceptions for the upgrades bounded context."""

from __future__ import annotations

from shared_kernel.exceptions import ConflictError, ConsoleError
from upgrades.domain.value_objects import UpgradeTarget


class ActiveTargetDeletionError(ConflictError):
    """Raised when deleting an upgrade target that is currently active.

    Detected before any request is built; the target must be deactivated
    first.
    """

    def __init__(self, target_id: str):
        super().__init__(
            f"Upgrade target {target_id} is active; deactivate it before deleting"
        )
        self.target_id = target_id


class OperationInProgressError(ConsoleError):
    """Raised when a target already has a toggle or delete in flight.

    Only the row being mutated is blocked; other rows stay usable.
    """

    def __init__(self, target_id: str):
        super().__init__(f"An operation on upgrade target {target_id} is in progress")
        self.target_id = target_id


class CollectionRefreshError(ConsoleError):
    """Raised when a mutation was applied but the re-fetch afterwards failed.

    The platform already holds the new state; only the listing is stale.

    Attributes:
        operation: Past-tense verb of the applied mutation (e.g. "activated")
        target_id: Target the mutation was applied to
        created: The new target, when the applied mutation was a create
    """

    def __init__(
        self,
        operation: str,
        target_id: str,
        cause: ConsoleError,
        created: UpgradeTarget | None = None,
    ):
        super().__init__(
            f"Upgrade target {target_id} was {operation}, but the target list "
            f"could not be reloaded: {cause.message}"
        )
        self.operation = operation
        self.target_id = target_id
        self.created = created
