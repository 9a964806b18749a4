"""Pydantic models for upgrade-target API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from upgrades.domain import UpgradeTarget, UpgradeTargetForm
from upgrades.ports import CollectionRefreshError


class CreateUpgradeTargetRequest(BaseModel):
    """Request model for creating an upgrade target.

    Fields may arrive blank so that every missing selection is reported
    in one validation error.
    """

    project_id: str = Field(default="", description="Project ID")
    package_id: str = Field(default="", description="Package ID within the project")
    release_id: str = Field(default="", description="Release ID within the package")
    name: str = Field(default="", description="Target name", max_length=255)
    description: str = Field(default="", description="Optional description")

    def to_form(self) -> UpgradeTargetForm:
        """Replay the selections through the cascading form."""
        form = UpgradeTargetForm(name=self.name, description=self.description)
        form.select_project(self.project_id.strip())
        form.select_package(self.package_id.strip())
        form.select_release(self.release_id.strip())
        return form


class UpdateUpgradeTargetRequest(BaseModel):
    """Request model for renaming or re-describing an upgrade target."""

    name: str = Field(default="", description="Target name", max_length=255)
    description: str = Field(default="", description="Description")


class UpgradeTargetResponse(BaseModel):
    """Response model for an upgrade target."""

    id: str
    tenant_id: str
    project_id: str
    package_id: str
    release_id: str
    name: str
    description: str
    is_active: bool
    created_by: str
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
    def from_domain(cls, target: UpgradeTarget) -> UpgradeTargetResponse:
        """Convert a domain UpgradeTarget to an API response."""
        return cls(
            id=target.id,
            tenant_id=target.tenant_id,
            project_id=target.project_id,
            package_id=target.package_id,
            release_id=target.release_id,
            name=target.name,
            description=target.description,
            is_active=target.is_active,
            created_by=target.created_by,
            created_at=target.created_at,
            updated_at=target.updated_at,
            project_name=target.project_name,
            package_name=target.package_name,
            package_type=target.package_type,
            version=target.version,
            file_name=target.file_name,
            file_size=target.file_size,
            file_hash=target.file_hash,
            download_url=target.download_url,
        )


class UpgradeTargetListResponse(BaseModel):
    """Response model for the upgrade-target collection."""

    targets: list[UpgradeTargetResponse]
    active_id: str | None = Field(
        default=None, description="ID of the active target, if any"
    )
    refreshed: bool = Field(
        default=True, description="False when the list could not be reloaded"
    )
    warning: str | None = None

    @classmethod
    def from_domain(
        cls, targets: tuple[UpgradeTarget, ...]
    ) -> UpgradeTargetListResponse:
        active = next((target.id for target in targets if target.is_active), None)
        return cls(
            targets=[UpgradeTargetResponse.from_domain(target) for target in targets],
            active_id=active,
        )

    @classmethod
    def stale(cls, error: CollectionRefreshError) -> UpgradeTargetListResponse:
        """Answer for a mutation that was applied but could not be re-listed."""
        return cls(targets=[], refreshed=False, warning=error.message)
