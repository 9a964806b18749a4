"""Create form for upgrade targets.

Selection is hierarchical: project, then package, then release. Choosing
a project clears the package and release; choosing a package clears the
release. Only the packages of the selected project are offered.
"""

from __future__ import annotations

from dataclasses import dataclass

from upgrades.domain.value_objects import NewUpgradeTarget

REQUIRED = "This field is required"


@dataclass(frozen=True)
class ProjectOption:
    id: str
    name: str


@dataclass(frozen=True)
class PackageOption:
    id: str
    name: str
    project_id: str


@dataclass(frozen=True)
class ReleaseOption:
    id: str
    version: str
    package_id: str = ""


@dataclass
class UpgradeTargetForm:
    """Mutable create-dialog state with cascading resets."""

    projects: tuple[ProjectOption, ...] = ()
    packages: tuple[PackageOption, ...] = ()
    releases: tuple[ReleaseOption, ...] = ()
    project_id: str = ""
    package_id: str = ""
    release_id: str = ""
    name: str = ""
    description: str = ""

    def select_project(self, project_id: str) -> None:
        self.project_id = project_id
        self.package_id = ""
        self.release_id = ""

    def select_package(self, package_id: str) -> None:
        self.package_id = package_id
        self.release_id = ""

    def select_release(self, release_id: str) -> None:
        self.release_id = release_id

    @property
    def available_packages(self) -> tuple[PackageOption, ...]:
        """Packages of the selected project; empty until one is chosen."""
        if not self.project_id:
            return ()
        return tuple(pkg for pkg in self.packages if pkg.project_id == self.project_id)

    @property
    def available_releases(self) -> tuple[ReleaseOption, ...]:
        """Releases of the selected package; empty until one is chosen."""
        if not self.package_id:
            return ()
        return tuple(
            release
            for release in self.releases
            if not release.package_id or release.package_id == self.package_id
        )

    @property
    def field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        for name in ("project_id", "package_id", "release_id"):
            if not getattr(self, name):
                errors[name] = REQUIRED
        if not self.name.strip():
            errors["name"] = REQUIRED
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    def to_request(self) -> NewUpgradeTarget:
        return NewUpgradeTarget(
            project_id=self.project_id,
            package_id=self.package_id,
            release_id=self.release_id,
            name=self.name.strip(),
            description=self.description.strip(),
        )
