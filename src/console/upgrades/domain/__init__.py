"""Upgrades domain module.

Contains the upgrade target value object, list filters, the create form
and the single-active helpers.
"""

from upgrades.domain.form import (
    PackageOption,
    ProjectOption,
    ReleaseOption,
    UpgradeTargetForm,
)
from upgrades.domain.value_objects import (
    NewUpgradeTarget,
    UpgradeTarget,
    UpgradeTargetFilter,
    active_targets,
    find_other_active,
)

__all__ = [
    "NewUpgradeTarget",
    "PackageOption",
    "ProjectOption",
    "ReleaseOption",
    "UpgradeTarget",
    "UpgradeTargetFilter",
    "UpgradeTargetForm",
    "active_targets",
    "find_other_active",
]
