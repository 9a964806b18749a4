"""Entity Catalog application service.

Loads the catalog vocabularies independently and concurrently, and
caches the resulting snapshot for the lifetime of the service instance
(one view / one request).
"""

from __future__ import annotations

import asyncio

from catalog.application.observability import CatalogProbe, DefaultCatalogProbe
from catalog.domain.value_objects import EntityCatalog
from catalog.ports.repositories import ICatalogRepository


class CatalogService:
    """Read-through cache over the catalog repository."""

    def __init__(
        self,
        repository: ICatalogRepository,
        probe: CatalogProbe | None = None,
    ):
        self._repository = repository
        self._probe = probe or DefaultCatalogProbe()
        self._snapshot: EntityCatalog | None = None

    async def get_catalog(self) -> EntityCatalog:
        """Return the cached snapshot, fetching it on first use.

        Raises:
            NetworkFailureError: If the platform cannot be reached
            PlatformError: If the platform rejects one of the reads
        """
        if self._snapshot is None:
            self._snapshot = await self._load()
        return self._snapshot

    async def refresh(self) -> EntityCatalog:
        """Drop the cached snapshot and fetch a new one."""
        self.invalidate()
        return await self.get_catalog()

    def invalidate(self) -> None:
        """Forget the cached snapshot; the next read re-fetches."""
        self._snapshot = None
        self._probe.catalog_invalidated()

    async def _load(self) -> EntityCatalog:
        try:
            users, tenants, objects, actions = await asyncio.gather(
                self._repository.list_users(),
                self._repository.list_tenants(),
                self._repository.list_objects(),
                self._repository.list_actions(),
            )
        except Exception as e:
            self._probe.catalog_load_failed(error=e)
            raise

        self._probe.catalog_loaded(
            user_count=len(users),
            tenant_count=len(tenants),
            object_count=len(objects),
            action_count=len(actions),
        )
        return EntityCatalog(
            users=tuple(users),
            tenants=tuple(tenants),
            objects=tuple(objects),
            actions=tuple(actions),
        )
