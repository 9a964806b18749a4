"""Platform-backed implementation of the catalog repository."""

from __future__ import annotations

from typing import Any

from catalog.domain.value_objects import TenantSummary, UserSummary
from catalog.ports.repositories import ICatalogRepository
from infrastructure.platform import PlatformClient


class PlatformCatalogRepository(ICatalogRepository):
    """Reads catalog vocabularies from the platform's casbin endpoints.

    Each endpoint answers ``{"<key>": [...]}`` inside the envelope; a
    missing or null list is read as empty.
    """

    def __init__(self, client: PlatformClient):
        self._client = client

    async def list_users(self) -> list[UserSummary]:
        data = await self._client.get("/casbin/users")
        return [
            UserSummary(id=str(item["id"]), name=str(item.get("name") or ""))
            for item in _items(data, "users")
        ]

    async def list_tenants(self) -> list[TenantSummary]:
        data = await self._client.get("/casbin/tenants")
        return [
            TenantSummary(id=str(item["id"]), name=str(item.get("name") or ""))
            for item in _items(data, "tenants")
        ]

    async def list_objects(self) -> list[str]:
        data = await self._client.get("/casbin/objects")
        return [str(item) for item in _items(data, "objects")]

    async def list_actions(self) -> list[str]:
        data = await self._client.get("/casbin/actions")
        return [str(item) for item in _items(data, "actions")]


def _items(data: Any, key: str) -> list[Any]:
    if not isinstance(data, dict):
        return []
    return list(data.get(key) or [])
