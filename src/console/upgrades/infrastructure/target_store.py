"""Platform-backed implementation of the upgrade target store."""

from __future__ import annotations

from dataclasses import asdict

from infrastructure.platform import PlatformClient
from upgrades.domain.value_objects import (
    NewUpgradeTarget,
    UpgradeTarget,
    UpgradeTargetFilter,
)
from upgrades.ports.target_store import IUpgradeTargetStore

UPGRADES_PATH = "/upgrades"


class PlatformUpgradeTargetStore(IUpgradeTargetStore):
    """Upgrade target store over the platform REST API.

    Both halves of an activation go through ``PUT /upgrades/{id}`` with an
    ``{is_active}`` body.
    """

    def __init__(self, client: PlatformClient):
        self._client = client

    async def list_targets(
        self, filters: UpgradeTargetFilter | None = None
    ) -> list[UpgradeTarget]:
        params = filters.as_params() if filters is not None else None
        data = await self._client.get(UPGRADES_PATH, params=params or None)
        return [UpgradeTarget.from_dict(item) for item in data or []]

    async def create(self, request: NewUpgradeTarget) -> UpgradeTarget:
        data = await self._client.post(UPGRADES_PATH, json=asdict(request))
        return UpgradeTarget.from_dict(data)

    async def set_active(self, target_id: str, is_active: bool) -> None:
        await self._client.put(
            f"{UPGRADES_PATH}/{target_id}", json={"is_active": is_active}
        )

    async def update_details(self, target_id: str, name: str, description: str) -> None:
        await self._client.put(
            f"{UPGRADES_PATH}/{target_id}",
            json={"name": name, "description": description},
        )

    async def delete(self, target_id: str) -> None:
        await self._client.delete(f"{UPGRADES_PATH}/{target_id}")
