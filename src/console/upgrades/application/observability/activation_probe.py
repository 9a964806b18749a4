"""Protocol for upgrade-target activation observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ActivationProbe(Protocol):
    """Domain probe for the upgrade-target activation controller."""

    def targets_loaded(self, count: int, active_count: int) -> None:
        """Record that the target collection was re-fetched."""
        ...

    def target_deactivated(self, target_id: str) -> None:
        """Record that the platform confirmed a deactivation."""
        ...

    def target_activated(self, target_id: str, replaced_id: str | None) -> None:
        """Record that the platform confirmed an activation."""
        ...

    def activation_aborted(
        self, target_id: str, blocking_id: str, error: Exception
    ) -> None:
        """Record that deactivating the current target failed.

        The requested activation was never issued.
        """
        ...

    def target_created(self, target_id: str, name: str) -> None:
        """Record that a target was created."""
        ...

    def target_updated(self, target_id: str) -> None:
        """Record that a target's name or description changed."""
        ...

    def target_deleted(self, target_id: str) -> None:
        """Record that a target was deleted."""
        ...

    def active_deletion_refused(self, target_id: str) -> None:
        """Record that deleting an active target was refused locally."""
        ...

    def operation_in_progress(self, target_id: str) -> None:
        """Record that a second operation on a busy target was refused."""
        ...

    def multiple_active_detected(self, target_ids: list[str]) -> None:
        """Record that a fetched snapshot holds more than one active target."""
        ...

    def refresh_failed(self, operation: str, target_id: str, error: Exception) -> None:
        """Record that the re-fetch after an applied mutation failed."""
        ...

    def with_context(self, context: ObservationContext) -> ActivationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultActivationProbe:
    """Default implementation of ActivationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultActivationProbe:
        """Create a new probe with observation context bound."""
        return DefaultActivationProbe(logger=self._logger, context=context)

    def targets_loaded(self, count: int, active_count: int) -> None:
        self._logger.debug(
            "upgrade_targets_loaded",
            count=count,
            active_count=active_count,
            **self._get_context_kwargs(),
        )

    def target_deactivated(self, target_id: str) -> None:
        self._logger.info(
            "upgrade_target_deactivated",
            target_id=target_id,
            **self._get_context_kwargs(),
        )

    def target_activated(self, target_id: str, replaced_id: str | None) -> None:
        self._logger.info(
            "upgrade_target_activated",
            target_id=target_id,
            replaced_id=replaced_id,
            **self._get_context_kwargs(),
        )

    def activation_aborted(
        self, target_id: str, blocking_id: str, error: Exception
    ) -> None:
        self._logger.warning(
            "upgrade_target_activation_aborted",
            target_id=target_id,
            blocking_id=blocking_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def target_created(self, target_id: str, name: str) -> None:
        self._logger.info(
            "upgrade_target_created",
            target_id=target_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def target_updated(self, target_id: str) -> None:
        self._logger.info(
            "upgrade_target_updated",
            target_id=target_id,
            **self._get_context_kwargs(),
        )

    def target_deleted(self, target_id: str) -> None:
        self._logger.info(
            "upgrade_target_deleted",
            target_id=target_id,
            **self._get_context_kwargs(),
        )

    def active_deletion_refused(self, target_id: str) -> None:
        self._logger.warning(
            "active_upgrade_target_deletion_refused",
            target_id=target_id,
            **self._get_context_kwargs(),
        )

    def operation_in_progress(self, target_id: str) -> None:
        self._logger.debug(
            "upgrade_target_operation_in_progress",
            target_id=target_id,
            **self._get_context_kwargs(),
        )

    def multiple_active_detected(self, target_ids: list[str]) -> None:
        self._logger.error(
            "multiple_active_upgrade_targets",
            target_ids=target_ids,
            **self._get_context_kwargs(),
        )

    def refresh_failed(self, operation: str, target_id: str, error: Exception) -> None:
        self._logger.warning(
            "upgrade_targets_refresh_failed",
            operation=operation,
            target_id=target_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
