"""Protocol for catalog service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CatalogProbe(Protocol):
    """Domain probe for Entity Catalog loading."""

    def catalog_loaded(
        self,
        user_count: int,
        tenant_count: int,
        object_count: int,
        action_count: int,
    ) -> None:
        """Record that a fresh catalog snapshot was fetched."""
        ...

    def catalog_load_failed(self, error: Exception) -> None:
        """Record that fetching the catalog failed."""
        ...

    def catalog_invalidated(self) -> None:
        """Record that the cached snapshot was dropped."""
        ...

    def with_context(self, context: ObservationContext) -> CatalogProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCatalogProbe:
    """Default implementation of CatalogProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCatalogProbe:
        """Create a new probe with observation context bound."""
        return DefaultCatalogProbe(logger=self._logger, context=context)

    def catalog_loaded(
        self,
        user_count: int,
        tenant_count: int,
        object_count: int,
        action_count: int,
    ) -> None:
        self._logger.debug(
            "catalog_loaded",
            user_count=user_count,
            tenant_count=tenant_count,
            object_count=object_count,
            action_count=action_count,
            **self._get_context_kwargs(),
        )

    def catalog_load_failed(self, error: Exception) -> None:
        self._logger.error(
            "catalog_load_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def catalog_invalidated(self) -> None:
        self._logger.debug("catalog_invalidated", **self._get_context_kwargs())
