"""Protocol for policy administration observability.

Defines the interface for domain probes that capture application-level
events of the permissions administration service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PolicyAdministrationProbe(Protocol):
    """Domain probe for policy administration operations."""

    def overview_loaded(
        self,
        role_policy_count: int,
        user_policy_count: int,
        role_assignment_count: int,
    ) -> None:
        """Record that the projected snapshot was built."""
        ...

    def mutation_applied(self, operation: str, request: dict[str, str]) -> None:
        """Record that the platform accepted a policy mutation."""
        ...

    def mutation_rejected(
        self, operation: str, reason: str, request: dict[str, str]
    ) -> None:
        """Record that a policy mutation was refused locally or by the platform."""
        ...

    def protected_row_refused(self, operation: str, subject: str) -> None:
        """Record that a mutation on an admin/owner row was refused."""
        ...

    def user_permissions_retrieved(self, user_id: str, permission_count: int) -> None:
        """Record that one user's effective permissions were fetched."""
        ...

    def with_context(self, context: ObservationContext) -> PolicyAdministrationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPolicyAdministrationProbe:
    """Default implementation of PolicyAdministrationProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultPolicyAdministrationProbe:
        """Create a new probe with observation context bound."""
        return DefaultPolicyAdministrationProbe(logger=self._logger, context=context)

    def overview_loaded(
        self,
        role_policy_count: int,
        user_policy_count: int,
        role_assignment_count: int,
    ) -> None:
        self._logger.debug(
            "permissions_overview_loaded",
            role_policy_count=role_policy_count,
            user_policy_count=user_policy_count,
            role_assignment_count=role_assignment_count,
            **self._get_context_kwargs(),
        )

    def mutation_applied(self, operation: str, request: dict[str, str]) -> None:
        self._logger.info(
            "policy_mutation_applied",
            operation=operation,
            request=request,
            **self._get_context_kwargs(),
        )

    def mutation_rejected(
        self, operation: str, reason: str, request: dict[str, str]
    ) -> None:
        self._logger.warning(
            "policy_mutation_rejected",
            operation=operation,
            reason=reason,
            request=request,
            **self._get_context_kwargs(),
        )

    def protected_row_refused(self, operation: str, subject: str) -> None:
        self._logger.warning(
            "protected_row_refused",
            operation=operation,
            subject=subject,
            **self._get_context_kwargs(),
        )

    def user_permissions_retrieved(self, user_id: str, permission_count: int) -> None:
        self._logger.debug(
            "user_permissions_retrieved",
            target_user_id=user_id,
            permission_count=permission_count,
            **self._get_context_kwargs(),
        )
