"""Value objects for the upgrade-target domain.

An upgrade target binds a (project, package, release) triple to the
artifact clients should upgrade to. Across the whole collection at most
one target is active.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class UpgradeTarget:
    """An upgrade target as listed by the platform.

    The fields after ``updated_at`` are joined release metadata; the
    platform may omit them.
    """

    id: str
    tenant_id: str
    project_id: str
    package_id: str
    release_id: str
    name: str
    description: str
    is_active: bool
    created_by: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    project_name: str | None = None
    package_name: str | None = None
    package_type: str | None = None
    version: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    file_hash: str | None = None
    download_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpgradeTarget:
        """Build from the platform's JSON representation.

        Raises:
            KeyError: If ``id`` is missing
        """
        return cls(
            id=str(data["id"]),
            tenant_id=str(data.get("tenant_id") or ""),
            project_id=str(data.get("project_id") or ""),
            package_id=str(data.get("package_id") or ""),
            release_id=str(data.get("release_id") or ""),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            is_active=bool(data.get("is_active", False)),
            created_by=str(data.get("created_by") or ""),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            project_name=data.get("project_name"),
            package_name=data.get("package_name"),
            package_type=data.get("package_type"),
            version=data.get("version"),
            file_name=data.get("file_name"),
            file_size=_optional_int(data.get("file_size")),
            file_hash=data.get("file_hash"),
            download_url=data.get("download_url"),
        )


@dataclass(frozen=True)
class UpgradeTargetFilter:
    """Optional list filters; ``None`` means not filtered."""

    project_id: str | None = None
    package_id: str | None = None
    is_active: bool | None = None

    def as_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.project_id:
            params["project_id"] = self.project_id
        if self.package_id:
            params["package_id"] = self.package_id
        if self.is_active is not None:
            params["is_active"] = "true" if self.is_active else "false"
        return params


@dataclass(frozen=True)
class NewUpgradeTarget:
    """Create request for an upgrade target."""

    project_id: str
    package_id: str
    release_id: str
    name: str
    description: str = ""


def active_targets(targets: Iterable[UpgradeTarget]) -> tuple[UpgradeTarget, ...]:
    """All targets flagged active; the invariant keeps this at most one."""
    return tuple(target for target in targets if target.is_active)


def find_other_active(
    targets: Iterable[UpgradeTarget], target: UpgradeTarget
) -> UpgradeTarget | None:
    """The active target other than ``target``, if any."""
    for candidate in targets:
        if candidate.is_active and candidate.id != target.id:
            return candidate
    return None
