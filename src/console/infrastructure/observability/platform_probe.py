"""Domain probe for platform API calls.

Captures domain-significant events about requests issued to the package
platform without exposing logging details to the client code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PlatformClientProbe(Protocol):
    """Domain probe for platform client observability."""

    def request_succeeded(self, method: str, path: str, status_code: int) -> None:
        """Record that a platform call returned a success envelope."""
        ...

    def request_rejected(
        self,
        method: str,
        path: str,
        status_code: int,
        code: int | None,
        message: str,
    ) -> None:
        """Record that the platform answered with a non-success envelope."""
        ...

    def transport_failed(self, method: str, path: str, error: Exception) -> None:
        """Record that a call failed before any response was received."""
        ...

    def with_context(self, context: ObservationContext) -> PlatformClientProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPlatformClientProbe:
    """Default implementation of PlatformClientProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPlatformClientProbe:
        """Create a new probe with observation context bound."""
        return DefaultPlatformClientProbe(logger=self._logger, context=context)

    def request_succeeded(self, method: str, path: str, status_code: int) -> None:
        self._logger.debug(
            "platform_request_succeeded",
            method=method,
            path=path,
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def request_rejected(
        self,
        method: str,
        path: str,
        status_code: int,
        code: int | None,
        message: str,
    ) -> None:
        self._logger.warning(
            "platform_request_rejected",
            method=method,
            path=path,
            status_code=status_code,
            code=code,
            message=message,
            **self._get_context_kwargs(),
        )

    def transport_failed(self, method: str, path: str, error: Exception) -> None:
        self._logger.error(
            "platform_transport_failed",
            method=method,
            path=path,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
