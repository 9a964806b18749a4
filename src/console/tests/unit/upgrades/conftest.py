"""Fixtures for the upgrades bounded context tests."""

import asyncio
import itertools
from dataclasses import replace

import pytest

from shared_kernel.exceptions import NotFoundError
from upgrades.domain import NewUpgradeTarget, UpgradeTarget, UpgradeTargetFilter


def make_target(target_id: str, is_active: bool = False, **overrides) -> UpgradeTarget:
    fields = {
        "id": target_id,
        "tenant_id": "t1",
        "project_id": "p1",
        "package_id": "k1",
        "release_id": f"r-{target_id}",
        "name": f"Target {target_id}",
        "description": "",
        "is_active": is_active,
    }
    fields.update(overrides)
    return UpgradeTarget(**fields)


class InMemoryTargetStore:
    """Upgrade target store keeping the collection in a dict.

    ``failures`` maps ``(target_id, is_active)`` to the exception a
    ``set_active`` call should raise. When ``gate`` is set, every
    ``set_active`` waits on it before taking effect; ``holds`` does the same
    for a single ``(target_id, is_active)`` call. ``list_failure`` is raised
    by listings issued after the first write.
    """

    def __init__(self, targets=()):
        self.targets = {target.id: target for target in targets}
        self.calls: list[tuple] = []
        self.failures: dict[tuple[str, bool], Exception] = {}
        self.gate: asyncio.Event | None = None
        self.holds: dict[tuple[str, bool], asyncio.Event] = {}
        self.list_failure: Exception | None = None
        self._ids = itertools.count(1)

    @property
    def active_ids(self) -> list[str]:
        return [target.id for target in self.targets.values() if target.is_active]

    async def list_targets(self, filters: UpgradeTargetFilter | None = None):
        self.calls.append(("list", filters))
        if self.list_failure is not None and any(
            call[0] != "list" for call in self.calls
        ):
            raise self.list_failure
        targets = list(self.targets.values())
        if filters is not None:
            if filters.project_id:
                targets = [t for t in targets if t.project_id == filters.project_id]
            if filters.package_id:
                targets = [t for t in targets if t.package_id == filters.package_id]
            if filters.is_active is not None:
                targets = [t for t in targets if t.is_active == filters.is_active]
        return targets

    async def create(self, request: NewUpgradeTarget) -> UpgradeTarget:
        self.calls.append(("create", request))
        target = make_target(
            f"new-{next(self._ids)}",
            project_id=request.project_id,
            package_id=request.package_id,
            release_id=request.release_id,
            name=request.name,
            description=request.description,
        )
        self.targets[target.id] = target
        return target

    async def set_active(self, target_id: str, is_active: bool) -> None:
        self.calls.append(("set_active", target_id, is_active))
        if self.gate is not None:
            await self.gate.wait()
        hold = self.holds.get((target_id, is_active))
        if hold is not None:
            await hold.wait()
        failure = self.failures.get((target_id, is_active))
        if failure is not None:
            raise failure
        self._require(target_id)
        self.targets[target_id] = replace(self.targets[target_id], is_active=is_active)

    async def update_details(self, target_id: str, name: str, description: str) -> None:
        self.calls.append(("update", target_id, name, description))
        self._require(target_id)
        self.targets[target_id] = replace(
            self.targets[target_id], name=name, description=description
        )

    async def delete(self, target_id: str) -> None:
        self.calls.append(("delete", target_id))
        self._require(target_id)
        del self.targets[target_id]

    def _require(self, target_id: str) -> None:
        if target_id not in self.targets:
            raise NotFoundError(f"Upgrade target {target_id} not found")


@pytest.fixture
def target_factory():
    """Factory for UpgradeTarget instances with sensible defaults."""
    return make_target


@pytest.fixture
def memory_store():
    """Store with X active and Y, Z inactive."""
    return InMemoryTargetStore(
        [make_target("x", is_active=True), make_target("y"), make_target("z")]
    )
