"""Repository protocols (ports) for the Entity Catalog.

Each vocabulary is fetched independently; implementations read them from
the platform and return them as value objects.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from catalog.domain.value_objects import TenantSummary, UserSummary


@runtime_checkable
class ICatalogRepository(Protocol):
    """Read-only source of the entities referenced by policy tuples."""

    async def list_users(self) -> list[UserSummary]:
        """List all platform users.

        Raises:
            NetworkFailureError: If the platform cannot be reached
            PlatformError: If the platform rejects the request
        """
        ...

    async def list_tenants(self) -> list[TenantSummary]:
        """List all tenants (policy domains)."""
        ...

    async def list_objects(self) -> list[str]:
        """List the object codes policies may reference."""
        ...

    async def list_actions(self) -> list[str]:
        """List the action codes policies may reference."""
        ...
